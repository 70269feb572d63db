"""Fee item rows belonging to a fee payment."""

from sqlalchemy import Column, ForeignKey, Integer, String

from feedesk.app.db.base_class import Base


class FeePaymentItem(Base):
    __tablename__ = "fee_payment_items"

    id = Column(Integer, primary_key=True, index=True)
    payment_id = Column(Integer, ForeignKey("fee_payments.id"), nullable=False, index=True)
    item_name = Column(String(255), nullable=False, default="")
    amount = Column(Integer, nullable=False, default=0)
    sort_order = Column(Integer, nullable=False, default=0)
