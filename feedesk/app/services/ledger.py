"""In-memory ledger of fee invoices and expenditures for one office session.

The ledger owns the only copy of the session's records. It is loaded from
the stores once, and every create/update/delete writes through to the
stores first and touches local state only after the whole write
succeeded. Invoice writes span two tables (``fee_payments`` and
``fee_payment_items``) which the stores cannot update atomically, so a
failed item write is undone by hand.
"""

import logging
from typing import Dict, Iterable, List, Tuple

from sqlalchemy.orm import sessionmaker

from feedesk.app.core.errors import InconsistentLedgerError, RecordNotFoundError, StoreError, ValidationError
from feedesk.app.core.settings import get_settings
from feedesk.app.models.expenditure import Expenditure as ExpenditureModel
from feedesk.app.models.fee_payment import FeePayment
from feedesk.app.models.fee_payment_item import FeePaymentItem
from feedesk.app.schemas.expenditure import Expenditure, ExpenditureDraft, ExpenditureFilter
from feedesk.app.schemas.fee_item import FeeItem
from feedesk.app.schemas.invoice import HistorySummary, Invoice, InvoiceDraft, InvoiceFilter, InvoiceTotals
from feedesk.app.services.adapters import (
    expenditure_from_row,
    expenditure_to_row,
    fee_item_from_row,
    group_item_rows,
    invoice_from_row,
    invoice_row_snapshot,
    invoice_to_row,
    item_to_row,
)
from feedesk.app.services.amounts import normalize_amount
from feedesk.app.services.fee_items import FeeItemSet
from feedesk.app.services.numbering import next_invoice_number
from feedesk.app.services.totals import compute_totals
from feedesk.app.store.table_store import SqlTableStore, TableStore

logger = logging.getLogger(__name__)


def _display_key(record) -> tuple:
    return (record.date, record.created_at)


def _in_range(value, date_from, date_to) -> bool:
    if date_from and value < date_from:
        return False
    if date_to and value > date_to:
        return False
    return True


def _matches_invoice_search(invoice: Invoice, search: str) -> bool:
    if not search:
        return True
    fields = (invoice.student_name, invoice.father_name, invoice.class_name, invoice.invoice_number)
    return any(search in (value or "").lower() for value in fields)


def prepare_invoice(draft: InvoiceDraft) -> Tuple[List[FeeItem], InvoiceTotals]:
    """Validate a draft and derive its clean items and totals. No writes."""
    if draft.date is None:
        raise ValidationError("missing-date", "Payment date is required.")
    if not draft.student_name.strip():
        raise ValidationError("missing-student-name", "Student name is required.")
    item_set = FeeItemSet(draft.items)
    item_set.validate()
    items = item_set.clean()
    totals = compute_totals(items, draft.amount_received)
    if totals.total > get_settings().max_amount:
        raise ValidationError("amount-too-large", "Total amount is larger than the ledger can store.")
    return items, totals


def prepare_expenditure(draft: ExpenditureDraft) -> dict:
    if draft.date is None:
        raise ValidationError("missing-date", "Expenditure date is required.")
    title = draft.title.strip()
    if not title:
        raise ValidationError("missing-title", "Expenditure title is required.")
    amount = normalize_amount(draft.amount)
    if amount <= 0:
        raise ValidationError("non-positive-amount", "Expenditure amount must be greater than zero.")
    if amount > get_settings().max_amount:
        raise ValidationError("amount-too-large", "Expenditure amount is larger than the ledger can store.")
    return expenditure_to_row(date=draft.date, title=title, amount=amount, notes=draft.notes.strip())


def history_summary(invoices: Iterable[Invoice]) -> HistorySummary:
    records = list(invoices)
    return HistorySummary(
        records=len(records),
        billed=sum(invoice.total_amount for invoice in records),
        collected=sum(invoice.amount_received for invoice in records),
        outstanding=sum(invoice.remaining_amount for invoice in records),
    )


class Ledger:
    def __init__(self, payments: TableStore, items: TableStore, expenditures: TableStore):
        self.payments = payments
        self.items = items
        self.expenditure_store = expenditures
        self._invoices: Dict[int, Invoice] = {}
        self._expenditures: Dict[int, Expenditure] = {}
        self.suggested_invoice_number = next_invoice_number([])

    @classmethod
    def from_session_factory(cls, session_factory: sessionmaker) -> "Ledger":
        return cls(
            payments=SqlTableStore(session_factory, FeePayment),
            items=SqlTableStore(session_factory, FeePaymentItem),
            expenditures=SqlTableStore(session_factory, ExpenditureModel),
        )

    # -- session state -------------------------------------------------

    def load(self) -> None:
        """Replace local state with a fresh read of every store."""
        payment_rows = self.payments.select_all(order_by="-created_at")
        item_rows = group_item_rows(self.items.select_all(order_by="sort_order"))
        expenditure_rows = self.expenditure_store.select_all(order_by="-created_at")

        self._invoices = {
            row["id"]: invoice_from_row(row, item_rows.get(row["id"], [])) for row in payment_rows
        }
        self._expenditures = {row["id"]: expenditure_from_row(row) for row in expenditure_rows}
        self._refresh_suggestion()
        logger.info("Loaded %d invoices and %d expenditures", len(self._invoices), len(self._expenditures))

    def _refresh_suggestion(self) -> None:
        self.suggested_invoice_number = next_invoice_number(self._invoices.values())

    @property
    def invoices(self) -> List[Invoice]:
        return sorted(self._invoices.values(), key=_display_key, reverse=True)

    @property
    def expenditures(self) -> List[Expenditure]:
        return sorted(self._expenditures.values(), key=_display_key, reverse=True)

    def get_invoice(self, invoice_id: int) -> Invoice:
        invoice = self._invoices.get(invoice_id)
        if invoice is None:
            raise RecordNotFoundError("invoice", invoice_id)
        return invoice

    def get_expenditure(self, expenditure_id: int) -> Expenditure:
        expenditure = self._expenditures.get(expenditure_id)
        if expenditure is None:
            raise RecordNotFoundError("expenditure", expenditure_id)
        return expenditure

    # -- invoices ------------------------------------------------------

    def _write_items(self, payment_id: int, items: List[FeeItem], written: List[dict]) -> None:
        for item in items:
            written.append(self.items.insert(item_to_row(payment_id, item)))

    def _restore_items(self, invoice: Invoice, removed: List[FeeItem], written: List[dict]) -> List[FeeItem]:
        """Undo item writes for ``invoice``; returns its items as now stored."""
        for row in written:
            self.items.delete(row["id"])
        restored = {}
        for item in removed:
            restored[item.id] = fee_item_from_row(self.items.insert(item_to_row(invoice.id, item)))
        return [restored.get(item.id, item) for item in invoice.items]

    def create_invoice(self, draft: InvoiceDraft) -> Invoice:
        items, totals = prepare_invoice(draft)
        invoice_number = draft.invoice_number.strip() or self.suggested_invoice_number

        parent = self.payments.insert(
            invoice_to_row(
                date=draft.date,
                student_name=draft.student_name.strip(),
                father_name=draft.father_name.strip(),
                class_name=draft.class_name.strip(),
                invoice_number=invoice_number,
                totals=totals,
            )
        )

        written: List[dict] = []
        try:
            self._write_items(parent["id"], items, written)
        except StoreError as exc:
            logger.warning("Fee items for invoice %s failed to save; removing the invoice", invoice_number)
            try:
                for row in written:
                    self.items.delete(row["id"])
                self.payments.delete(parent["id"])
            except StoreError as rollback_exc:
                logger.error("Could not remove partially saved invoice %s (id=%s)", invoice_number, parent["id"])
                raise InconsistentLedgerError(
                    f"Invoice {invoice_number} was partially saved and could not be removed"
                ) from rollback_exc
            raise StoreError(f"Fee items for invoice {invoice_number} could not be saved") from exc

        invoice = invoice_from_row(parent, written)
        self._invoices[invoice.id] = invoice
        self._refresh_suggestion()
        logger.info("Recorded invoice %s for %s (total=%d)", invoice.invoice_number, invoice.student_name, invoice.total_amount)
        return invoice

    def update_invoice(self, invoice_id: int, draft: InvoiceDraft) -> Invoice:
        """Replace an invoice's fields and items; all or nothing."""
        current = self.get_invoice(invoice_id)
        items, totals = prepare_invoice(draft)
        invoice_number = draft.invoice_number.strip() or current.invoice_number

        parent = self.payments.update(
            invoice_id,
            invoice_to_row(
                date=draft.date,
                student_name=draft.student_name.strip(),
                father_name=draft.father_name.strip(),
                class_name=draft.class_name.strip(),
                invoice_number=invoice_number,
                totals=totals,
            ),
        )

        removed: List[FeeItem] = []
        written: List[dict] = []
        try:
            for item in current.items:
                self.items.delete(item.id)
                removed.append(item)
            self._write_items(invoice_id, items, written)
        except StoreError as exc:
            logger.warning("Fee items for invoice %s failed to update; rolling back", current.invoice_number)
            try:
                restored_items = self._restore_items(current, removed, written)
                self.payments.update(invoice_id, invoice_row_snapshot(current))
            except StoreError as rollback_exc:
                logger.error("Rollback of invoice %s (id=%s) failed", current.invoice_number, invoice_id)
                raise InconsistentLedgerError(
                    f"Invoice {current.invoice_number} could not be restored after a failed edit"
                ) from rollback_exc
            self._invoices[invoice_id] = current.model_copy(update={"items": restored_items})
            raise StoreError(f"Invoice {current.invoice_number} could not be updated") from exc

        invoice = invoice_from_row(parent, written)
        self._invoices[invoice_id] = invoice
        self._refresh_suggestion()
        logger.info("Updated invoice %s (total=%d)", invoice.invoice_number, invoice.total_amount)
        return invoice

    def delete_invoice(self, invoice_id: int) -> None:
        current = self.get_invoice(invoice_id)

        removed: List[FeeItem] = []
        try:
            for item in current.items:
                self.items.delete(item.id)
                removed.append(item)
            self.payments.delete(invoice_id)
        except StoreError as exc:
            logger.warning("Delete of invoice %s failed; restoring its items", current.invoice_number)
            try:
                restored_items = self._restore_items(current, removed, [])
            except StoreError as rollback_exc:
                logger.error("Items of invoice %s (id=%s) could not be restored", current.invoice_number, invoice_id)
                raise InconsistentLedgerError(
                    f"Invoice {current.invoice_number} lost fee items during a failed delete"
                ) from rollback_exc
            self._invoices[invoice_id] = current.model_copy(update={"items": restored_items})
            raise StoreError(f"Invoice {current.invoice_number} could not be deleted") from exc

        del self._invoices[invoice_id]
        self._refresh_suggestion()
        logger.info("Deleted invoice %s", current.invoice_number)

    def filter(self, criteria: InvoiceFilter | None = None) -> List[Invoice]:
        """Invoices matching every given criterion, newest first."""
        criteria = criteria or InvoiceFilter()
        search = criteria.search.strip().lower()
        return [
            invoice
            for invoice in self.invoices
            if _matches_invoice_search(invoice, search)
            and (not criteria.class_name or invoice.class_name == criteria.class_name)
            and _in_range(invoice.date, criteria.date_from, criteria.date_to)
        ]

    def class_options(self) -> List[str]:
        seen: List[str] = []
        for invoice in self.invoices:
            if invoice.class_name and invoice.class_name not in seen:
                seen.append(invoice.class_name)
        return seen

    # -- expenditures --------------------------------------------------

    def create_expenditure(self, draft: ExpenditureDraft) -> Expenditure:
        row = self.expenditure_store.insert(prepare_expenditure(draft))
        expenditure = expenditure_from_row(row)
        self._expenditures[expenditure.id] = expenditure
        logger.info("Recorded expenditure %r (amount=%d)", expenditure.title, expenditure.amount)
        return expenditure

    def update_expenditure(self, expenditure_id: int, draft: ExpenditureDraft) -> Expenditure:
        self.get_expenditure(expenditure_id)
        row = self.expenditure_store.update(expenditure_id, prepare_expenditure(draft))
        expenditure = expenditure_from_row(row)
        self._expenditures[expenditure_id] = expenditure
        logger.info("Updated expenditure %s", expenditure_id)
        return expenditure

    def delete_expenditure(self, expenditure_id: int) -> None:
        self.get_expenditure(expenditure_id)
        self.expenditure_store.delete(expenditure_id)
        del self._expenditures[expenditure_id]
        logger.info("Deleted expenditure %s", expenditure_id)

    def filter_expenditures(self, criteria: ExpenditureFilter | None = None) -> List[Expenditure]:
        criteria = criteria or ExpenditureFilter()
        search = criteria.search.strip().lower()
        return [
            expenditure
            for expenditure in self.expenditures
            if (not search or search in expenditure.title.lower() or search in expenditure.notes.lower())
            and _in_range(expenditure.date, criteria.date_from, criteria.date_to)
        ]
