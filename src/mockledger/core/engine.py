from __future__ import annotations

import contextlib
import logging
import threading
from collections import deque
from typing import TYPE_CHECKING, Any, ContextManager, Deque, Dict, Iterable, List, Mapping, Optional, Tuple

from mockledger.common.canonical_json import canonical_dumps_str
from mockledger.schemas.config import EngineConfig

from .errors import (
    ConfigurationError,
    UnconsumedStubsError,
    UnstubbedCallError,
    UnverifiedInteractionsError,
    VerificationError,
)
from .recorder import CallRecorder
from .types import CapturedCall, StubResponse, VerificationResult, VerifyCount

if TYPE_CHECKING:
    from mockledger.report.report import InteractionReport

logger = logging.getLogger(__name__)


def _count_by_method(calls: Iterable[CapturedCall]) -> Tuple[Tuple[str, int], ...]:
    counts: Dict[str, int] = {}
    for call in calls:
        counts[call.method_name] = counts.get(call.method_name, 0) + 1
    return tuple(counts.items())


class MockEngine:
    """Strict call registry behind a test double.

    Each mocked method forwards to :meth:`call`, which records the invocation
    and hands back the oldest registered response for that method. Responses
    are consumed exactly once, in registration order; a call with nothing
    queued raises :class:`UnstubbedCallError` instead of returning a default.

    Verification works on recorded counts only. A successful :meth:`verify`
    marks the method's calls as consumed, and
    :meth:`verify_no_more_interactions` fails while any call is left
    unconsumed.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self._recorder = CallRecorder()
        self._stubs: Dict[str, Deque[StubResponse]] = {}
        self._lock: ContextManager[Any] = (
            threading.RLock() if self.config.thread_safe else contextlib.nullcontext()
        )

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def recorder(self) -> CallRecorder:
        return self._recorder

    # ------------------------------------------------------------------
    def register(self, method_name: str, responses: Iterable[StubResponse]) -> None:
        if not isinstance(method_name, str) or not method_name:
            raise ConfigurationError("method_name_must_be_non_empty_str")
        items: List[StubResponse] = list(responses)
        for response in items:
            if not isinstance(response, StubResponse):
                raise ConfigurationError(f"not_a_stub_response: {type(response).__name__}")
            if response.method_name != method_name:
                raise ConfigurationError(
                    f"stub_method_mismatch: {response.method_name!r} registered under {method_name!r}"
                )
        if not items:
            if self.config.empty_registration == "error":
                raise ConfigurationError(f"empty_registration: {method_name}")
            return
        with self._lock:
            self._stubs.setdefault(method_name, deque()).extend(items)
            queued = len(self._stubs[method_name])
        logger.debug(
            "mockledger.engine.registered",
            extra={"mock": self.name, "method": method_name, "added": len(items), "queued": queued},
        )

    def returns(self, method_name: str, *payloads: Any) -> None:
        self.register(method_name, [StubResponse.value(method_name, p) for p in payloads])

    def raises(self, method_name: str, *failures: BaseException) -> None:
        self.register(method_name, [StubResponse.error(method_name, f) for f in failures])

    def call(self, method_name: str, parameters: Optional[Mapping[str, Any]] = None) -> Any:
        with self._lock:
            captured = self._recorder.record(method_name, parameters)
            queue = self._stubs.get(method_name)
            response = queue.popleft() if queue else None
        logger.debug(
            "mockledger.engine.call_recorded",
            extra={"mock": self.name, "method": method_name, "sequence_index": captured.sequence_index},
        )
        if response is None:
            logger.info("mockledger.engine.unstubbed_call", extra={"mock": self.name, "method": method_name})
            raise UnstubbedCallError(method_name, self.name)
        if response.failure is not None:
            logger.debug(
                "mockledger.engine.failure_delivered",
                extra={"mock": self.name, "method": method_name, "failure": type(response.failure).__name__},
            )
            raise response.failure
        return response.payload

    # ------------------------------------------------------------------
    def verify(self, method_name: str, called: VerifyCount) -> VerificationResult:
        with self._lock:
            calls = self._recorder.calls_for(method_name)
            actual = len(calls)
            if not called.matches(actual):
                last = canonical_dumps_str(calls[-1].parameters) if calls else None
                logger.info(
                    "mockledger.engine.verification_failed",
                    extra={
                        "mock": self.name,
                        "method": method_name,
                        "expected": called.describe(),
                        "actual": actual,
                    },
                )
                raise VerificationError(method_name, called, actual, self.name, last)
            for call in calls:
                self._recorder.mark_consumed(call)
        logger.debug(
            "mockledger.engine.verified",
            extra={"mock": self.name, "method": method_name, "expected": called.describe(), "actual": actual},
        )
        return VerificationResult(method_name=method_name, expected=called, calls=calls)

    def param_captured(self, method_name: str) -> List[Mapping[str, Any]]:
        with self._lock:
            return [call.parameters for call in self._recorder.calls_for(method_name)]

    def verify_no_more_interactions(self) -> None:
        with self._lock:
            unverified = _count_by_method(self._recorder.unconsumed())
        if unverified:
            logger.info(
                "mockledger.engine.unverified_interactions",
                extra={"mock": self.name, "unverified": dict(unverified)},
            )
            raise UnverifiedInteractionsError(unverified, self.name)

    # ------------------------------------------------------------------
    def pending_stubs(self, method_name: Optional[str] = None) -> int:
        with self._lock:
            if method_name is not None:
                return len(self._stubs.get(method_name, ()))
            return sum(len(queue) for queue in self._stubs.values())

    def verify_all_stubs_consumed(self) -> None:
        with self._lock:
            pending = tuple((name, len(queue)) for name, queue in self._stubs.items() if queue)
        if pending:
            raise UnconsumedStubsError(pending, self.name)

    def registered_methods(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._stubs)

    def reset(self) -> None:
        with self._lock:
            self._recorder.clear()
            self._stubs.clear()
        logger.debug("mockledger.engine.reset", extra={"mock": self.name})

    def snapshot(self) -> Tuple[Tuple[CapturedCall, ...], Dict[str, int]]:
        """Recorded calls plus pending stub counts, read under one lock."""
        with self._lock:
            calls = self._recorder.all_calls()
            pending = {name: len(queue) for name, queue in self._stubs.items()}
        return calls, pending

    def report(self) -> "InteractionReport":
        from mockledger.report.report import build_report

        return build_report(self)
