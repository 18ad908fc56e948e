# app/models/holiday.py
from sqlalchemy import Column, String, Date, DateTime, ForeignKey, Uuid, Index
from sqlalchemy.sql import func
from datetime import date
import uuid
from app.models.base import Base


class BusinessHoliday(Base):
    """Inclusive date range during which the business is fully closed"""
    __tablename__ = "business_holidays"
    __table_args__ = (
        Index("idx_business_holidays_dates", "start_date", "end_date"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(Uuid(as_uuid=True), ForeignKey("businesses.id"), nullable=False, index=True)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    reason = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def overlaps(self, start: date, end: date) -> bool:
        return self.start_date <= end and start <= self.end_date

    def __repr__(self):
        return f"<BusinessHoliday(business_id={self.business_id}, {self.start_date}..{self.end_date})>"
