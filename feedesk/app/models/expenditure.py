"""Expenditure model."""

from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, Integer, String, Text

from feedesk.app.db.base_class import Base


class Expenditure(Base):
    __tablename__ = "expenditures"

    id = Column(Integer, primary_key=True, index=True)
    expense_date = Column(Date, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    amount = Column(Integer, nullable=False)
    notes = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
