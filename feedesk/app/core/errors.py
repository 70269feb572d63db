"""Error taxonomy for ledger operations."""


class LedgerError(Exception):
    """Base class for every error raised by the ledger."""


class ValidationError(LedgerError):
    """User input violates an invariant; nothing was written."""

    def __init__(self, code: str, message: str | None = None):
        super().__init__(message or code)
        self.code = code


class RecordNotFoundError(LedgerError):
    def __init__(self, kind: str, record_id):
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


class StoreError(LedgerError):
    """The persistence collaborator failed. Local ledger state is unchanged."""


class InconsistentLedgerError(StoreError):
    """A compensating write failed; stored data may be partially written."""
