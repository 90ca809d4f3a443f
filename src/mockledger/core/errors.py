from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from .types import VerifyCount


class MockLedgerError(RuntimeError):
    pass


class ConfigurationError(MockLedgerError, ValueError):
    pass


class UnstubbedCallError(MockLedgerError):
    """A mocked method was invoked with no queued response."""

    def __init__(self, method_name: str, mock_name: str = "mock"):
        self.method_name = method_name
        self.mock_name = mock_name
        super().__init__(
            f"unstubbed_call: {mock_name}.{method_name} was called "
            "but no response is registered for it"
        )


class VerificationError(MockLedgerError, AssertionError):
    def __init__(
        self,
        method_name: str,
        expected: "VerifyCount",
        actual: int,
        mock_name: str = "mock",
        last_parameters: str | None = None,
    ):
        self.method_name = method_name
        self.expected = expected
        self.actual = actual
        self.mock_name = mock_name
        message = (
            f"verification_failed: {mock_name}.{method_name} expected "
            f"{expected.describe()}, got {actual}"
        )
        if last_parameters is not None:
            message += f" (last call parameters: {last_parameters})"
        super().__init__(message)


def _format_counts(pairs: Tuple[Tuple[str, int], ...]) -> str:
    return ", ".join(f"{name} x{count}" for name, count in pairs)


class UnverifiedInteractionsError(MockLedgerError, AssertionError):
    def __init__(self, unverified: Tuple[Tuple[str, int], ...], mock_name: str = "mock"):
        self.unverified = unverified
        self.mock_name = mock_name
        super().__init__(
            f"unverified_interactions: {mock_name} has calls that were never "
            f"verified: {_format_counts(unverified)}"
        )

    @property
    def method_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.unverified)


class UnconsumedStubsError(MockLedgerError, AssertionError):
    def __init__(self, pending: Tuple[Tuple[str, int], ...], mock_name: str = "mock"):
        self.pending = pending
        self.mock_name = mock_name
        super().__init__(
            f"unconsumed_stubs: {mock_name} has registered responses that were "
            f"never returned: {_format_counts(pending)}"
        )


class StubPayloadTypeError(MockLedgerError, TypeError):
    def __init__(self, method_name: str, expected: type | Tuple[type, ...], payload: object):
        self.method_name = method_name
        self.expected = expected
        self.payload = payload
        names = expected if isinstance(expected, tuple) else (expected,)
        expected_names = " | ".join(t.__name__ for t in names)
        super().__init__(
            f"stub_payload_type: {method_name} expected {expected_names}, "
            f"got {type(payload).__name__}"
        )
