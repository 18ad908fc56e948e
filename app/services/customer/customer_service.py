# app/services/customer/customer_service.py
"""Customer resolution for public bookings"""
from sqlalchemy.orm import Session
import logging

from app.models.business import Business
from app.models.customer import Customer

logger = logging.getLogger(__name__)


class CustomerService:
    """Handles customer lookups scoped to one business"""

    @staticmethod
    def find_or_create_customer(db: Session, business: Business, info) -> Customer:
        """
        Find the business's customer by email, refreshing contact details, or create one.

        Flushes but never commits; the caller owns the transaction.
        """
        email = info.email.strip().lower()
        customer = db.query(Customer).filter(
            Customer.business_id == business.id,
            Customer.email == email
        ).first()

        if customer:
            customer.first_name = info.first_name
            customer.last_name = info.last_name
            customer.phone = info.phone
        else:
            logger.info(f"Creating customer {email} for business {business.id}")
            customer = Customer(
                business_id=business.id,
                first_name=info.first_name,
                last_name=info.last_name,
                email=email,
                phone=info.phone,
                total_appointments=0,
            )
            db.add(customer)

        db.flush()
        return customer
