from fastapi import Request

from feedesk.app.db.session import SessionLocal
from feedesk.app.services.ledger import Ledger


def get_ledger(request: Request) -> Ledger:
    """Return the process ledger, loading it from the stores on first use."""
    ledger = getattr(request.app.state, "ledger", None)
    if ledger is None:
        ledger = Ledger.from_session_factory(SessionLocal)
        ledger.load()
        request.app.state.ledger = ledger
    return ledger
