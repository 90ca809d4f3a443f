from .canonical_json import canonical_dumps_bytes, canonical_dumps_str, canonicalize, stable_object_hash
from .schema_validate import load_schema, validate_json
