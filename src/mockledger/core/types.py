from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, Literal, Mapping, Optional, Tuple

from .errors import ConfigurationError

CountKind = Literal["exact", "at_least", "at_most"]


@dataclass(frozen=True, eq=False)
class CapturedCall:
    """One recorded invocation.

    Frozen; only the owning ``CallRecorder`` flips ``consumed_for_verification``.
    ``parameters`` is a read-only view over a private copy of the mapping that
    was passed in.
    """

    method_name: str
    parameters: Mapping[str, Any]
    sequence_index: int
    consumed_for_verification: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))


@dataclass(frozen=True)
class StubResponse:
    method_name: str
    payload: Any = None
    failure: Optional[BaseException] = None

    def __post_init__(self) -> None:
        if self.failure is not None and self.payload is not None:
            raise ConfigurationError("stub_response_payload_and_failure")
        if self.failure is not None and not isinstance(self.failure, BaseException):
            raise ConfigurationError("stub_response_failure_not_exception")

    @classmethod
    def value(cls, method_name: str, payload: Any) -> "StubResponse":
        return cls(method_name=method_name, payload=payload)

    @classmethod
    def error(cls, method_name: str, failure: BaseException) -> "StubResponse":
        return cls(method_name=method_name, failure=failure)

    @property
    def is_failure(self) -> bool:
        return self.failure is not None


@dataclass(frozen=True)
class VerifyCount:
    kind: CountKind
    n: int

    AT_LEAST_ONCE: ClassVar["VerifyCount"]
    NEVER: ClassVar["VerifyCount"]

    def __post_init__(self) -> None:
        if self.kind not in ("exact", "at_least", "at_most"):
            raise ConfigurationError("verify_count_unknown_kind")
        if isinstance(self.n, bool) or not isinstance(self.n, int):
            raise ConfigurationError("verify_count_must_be_int")
        if self.n < 0:
            raise ConfigurationError("verify_count_must_be_non_negative")

    @classmethod
    def exact(cls, n: int) -> "VerifyCount":
        return cls("exact", n)

    @classmethod
    def at_least(cls, n: int) -> "VerifyCount":
        return cls("at_least", n)

    @classmethod
    def at_most(cls, n: int) -> "VerifyCount":
        return cls("at_most", n)

    def matches(self, actual: int) -> bool:
        if self.kind == "exact":
            return actual == self.n
        if self.kind == "at_least":
            return actual >= self.n
        return actual <= self.n

    def describe(self) -> str:
        noun = "call" if self.n == 1 else "calls"
        if self.kind == "exact":
            if self.n == 0:
                return "no calls"
            return f"exactly {self.n} {noun}"
        if self.kind == "at_least":
            return f"at least {self.n} {noun}"
        return f"at most {self.n} {noun}"


VerifyCount.AT_LEAST_ONCE = VerifyCount.at_least(1)
VerifyCount.NEVER = VerifyCount.exact(0)

AT_LEAST_ONCE = VerifyCount.AT_LEAST_ONCE
NEVER = VerifyCount.NEVER


@dataclass(frozen=True)
class VerificationResult:
    """Calls matched by a successful ``verify``, oldest first."""

    method_name: str
    expected: VerifyCount
    calls: Tuple[CapturedCall, ...] = field(default_factory=tuple)

    @property
    def count(self) -> int:
        return len(self.calls)

    @property
    def last(self) -> Optional[CapturedCall]:
        return self.calls[-1] if self.calls else None

    @property
    def parameters(self) -> Optional[Mapping[str, Any]]:
        last = self.last
        return None if last is None else last.parameters

    def all_parameters(self) -> list[Mapping[str, Any]]:
        return [call.parameters for call in self.calls]
