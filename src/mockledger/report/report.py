from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Tuple

from mockledger.common.canonical_json import canonical_dumps_str, canonicalize, stable_object_hash
from mockledger.common.schema_validate import validate_json
from mockledger.schemas import INTERACTION_REPORT_SCHEMA

if TYPE_CHECKING:
    from mockledger.core.engine import MockEngine

REPORT_VERSION = "interaction-report-0.1"


@dataclass(frozen=True)
class CallEntry:
    sequence_index: int
    parameters: Mapping[str, Any]
    consumed: bool

    def to_obj(self) -> dict[str, Any]:
        return {
            "sequence_index": self.sequence_index,
            "parameters": canonicalize(self.parameters),
            "consumed": self.consumed,
        }


@dataclass(frozen=True)
class MethodSummary:
    method: str
    calls: Tuple[CallEntry, ...]
    pending_stubs: int

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def verified_count(self) -> int:
        return sum(1 for call in self.calls if call.consumed)

    def to_obj(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "call_count": self.call_count,
            "verified_count": self.verified_count,
            "pending_stubs": self.pending_stubs,
            "calls": [call.to_obj() for call in self.calls],
        }


@dataclass(frozen=True)
class InteractionReport:
    mock: str
    methods: Tuple[MethodSummary, ...]

    @property
    def total_calls(self) -> int:
        return sum(method.call_count for method in self.methods)

    def method(self, name: str) -> MethodSummary | None:
        for summary in self.methods:
            if summary.method == name:
                return summary
        return None

    def to_obj(self) -> dict[str, Any]:
        return {
            "version": REPORT_VERSION,
            "mock": self.mock,
            "total_calls": self.total_calls,
            "methods": [method.to_obj() for method in self.methods],
        }


def build_report(engine: "MockEngine") -> InteractionReport:
    calls, pending = engine.snapshot()
    grouped: Dict[str, List[CallEntry]] = {}
    for call in calls:
        grouped.setdefault(call.method_name, []).append(
            CallEntry(
                sequence_index=call.sequence_index,
                parameters=dict(call.parameters),
                consumed=call.consumed_for_verification,
            )
        )
    # stubbed but never called methods go after the called ones
    for name in pending:
        grouped.setdefault(name, [])
    methods = tuple(
        MethodSummary(method=name, calls=tuple(entries), pending_stubs=pending.get(name, 0))
        for name, entries in grouped.items()
    )
    return InteractionReport(mock=engine.name, methods=methods)


def render_report_json(report: InteractionReport) -> str:
    obj = report.to_obj()
    validate_json(obj, INTERACTION_REPORT_SCHEMA)
    return canonical_dumps_str(obj)


def interaction_fingerprint(report: InteractionReport) -> str:
    """Hash of the call history alone: method names and parameters in call order."""
    entries = [
        (call.sequence_index, summary.method, call.parameters)
        for summary in report.methods
        for call in summary.calls
    ]
    entries.sort(key=lambda entry: entry[0])
    history = [{"method": method, "parameters": parameters} for _, method, parameters in entries]
    return stable_object_hash(history)


__all__ = [
    "REPORT_VERSION",
    "CallEntry",
    "InteractionReport",
    "MethodSummary",
    "build_report",
    "interaction_fingerprint",
    "render_report_json",
]
