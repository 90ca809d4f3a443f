from pathlib import Path

from .config import EngineConfig

SCHEMA_DIR = Path(__file__).resolve().parent
INTERACTION_REPORT_SCHEMA = SCHEMA_DIR / "interaction_report.schema.json"

__all__ = ["INTERACTION_REPORT_SCHEMA", "SCHEMA_DIR", "EngineConfig"]
