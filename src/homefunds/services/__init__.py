"""Service module exports."""

from . import (
    aggregation,
    budgeting,
    dashboard,
    export_csv,
    formatting,
    ledger_service,
    periods,
    reports,
)

__all__ = [
    "aggregation",
    "budgeting",
    "dashboard",
    "export_csv",
    "formatting",
    "ledger_service",
    "periods",
    "reports",
]
