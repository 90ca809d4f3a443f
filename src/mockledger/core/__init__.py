from .engine import MockEngine
from .errors import (
    ConfigurationError,
    MockLedgerError,
    StubPayloadTypeError,
    UnconsumedStubsError,
    UnstubbedCallError,
    UnverifiedInteractionsError,
    VerificationError,
)
from .recorder import CallRecorder
from .types import (
    AT_LEAST_ONCE,
    NEVER,
    CapturedCall,
    StubResponse,
    VerificationResult,
    VerifyCount,
)

__all__ = [
    "AT_LEAST_ONCE",
    "NEVER",
    "CallRecorder",
    "CapturedCall",
    "ConfigurationError",
    "MockEngine",
    "MockLedgerError",
    "StubPayloadTypeError",
    "StubResponse",
    "UnconsumedStubsError",
    "UnstubbedCallError",
    "UnverifiedInteractionsError",
    "VerificationError",
    "VerificationResult",
    "VerifyCount",
]
