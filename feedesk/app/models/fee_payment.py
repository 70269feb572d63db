"""Fee payment (invoice) model."""

from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, Integer, String

from feedesk.app.db.base_class import Base


class FeePayment(Base):
    __tablename__ = "fee_payments"

    id = Column(Integer, primary_key=True, index=True)
    invoice_no = Column(String(50), nullable=False, index=True)
    payment_date = Column(Date, nullable=False, index=True)
    student_name = Column(String(255), nullable=False)
    father_name = Column(String(255), nullable=False, default="")
    class_name = Column(String(100), nullable=False, default="")

    total_amount = Column(Integer, nullable=False, default=0)
    amount_received = Column(Integer, nullable=False, default=0)
    remaining_amount = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc), nullable=False)
