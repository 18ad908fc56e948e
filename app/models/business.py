# app/models/business.py
"""
Business Model
A business owns its services, weekly schedule, exceptions, holidays and appointments.
"""
from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from sqlalchemy.sql import func
import uuid
from app.models.base import Base


class Business(Base):
    __tablename__ = "businesses"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)

    # Public lookup key used by the booking pages
    slug = Column(String(100), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=True)

    # Technical fields
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<Business(id={self.id}, slug={self.slug})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": str(self.id),
            "name": self.name,
            "slug": self.slug,
            "email": self.email,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
