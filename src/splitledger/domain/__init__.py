"""Domain layer for splitledger application."""

__all__ = [
    "LedgerService",
    "ReportService",
]


# Services are loaded lazily: the store layer imports domain.entities, and the
# services import the store layer.
def __getattr__(name):
    if name == "LedgerService":
        from splitledger.domain.ledger import LedgerService
        return LedgerService
    if name == "ReportService":
        from splitledger.domain.reports import ReportService
        return ReportService
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
