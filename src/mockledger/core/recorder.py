from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from .types import CapturedCall


class CallRecorder:
    """Append-only record of the invocations made against one mock instance.

    Pure bookkeeping: no locking and no policy. ``MockEngine`` serializes
    access when it is configured to be thread safe.
    """

    def __init__(self) -> None:
        self._by_method: Dict[str, List[CapturedCall]] = {}
        self._by_index: Dict[int, CapturedCall] = {}
        self._next_index = 0

    def record(self, method_name: str, parameters: Optional[Mapping[str, Any]] = None) -> CapturedCall:
        call = CapturedCall(
            method_name=method_name,
            parameters=parameters or {},
            sequence_index=self._next_index,
        )
        self._next_index += 1
        self._by_method.setdefault(method_name, []).append(call)
        self._by_index[call.sequence_index] = call
        return call

    def calls_for(self, method_name: str) -> Tuple[CapturedCall, ...]:
        return tuple(self._by_method.get(method_name, ()))

    def all_calls(self) -> Tuple[CapturedCall, ...]:
        # indices are handed out in increasing order, so insertion order is global call order
        return tuple(self._by_index.values())

    def count(self, method_name: str) -> int:
        return len(self._by_method.get(method_name, ()))

    def method_names(self) -> Tuple[str, ...]:
        return tuple(self._by_method)

    def mark_consumed(self, call: CapturedCall | int) -> None:
        index = call.sequence_index if isinstance(call, CapturedCall) else call
        try:
            recorded = self._by_index[index]
        except KeyError:
            raise KeyError(f"unknown_call: {index}") from None
        if isinstance(call, CapturedCall) and recorded is not call:
            raise KeyError(f"foreign_call: {index}")
        object.__setattr__(recorded, "consumed_for_verification", True)

    def unconsumed(self) -> Tuple[CapturedCall, ...]:
        return tuple(call for call in self._by_index.values() if not call.consumed_for_verification)

    def clear(self) -> None:
        """Forget recorded calls; sequence indices keep counting."""
        self._by_method.clear()
        self._by_index.clear()
