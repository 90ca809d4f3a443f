from .report import (
    REPORT_VERSION,
    CallEntry,
    InteractionReport,
    MethodSummary,
    build_report,
    interaction_fingerprint,
    render_report_json,
)

__all__ = [
    "REPORT_VERSION",
    "CallEntry",
    "InteractionReport",
    "MethodSummary",
    "build_report",
    "interaction_fingerprint",
    "render_report_json",
]
