"""Data access layer for customers and loan applications"""

import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Union

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from loan_intake.domain.exceptions import CustomerAlreadyExistsError, CustomerHasLoanApplicationsError
from loan_intake.domain.models import Customer, LoanApplication, Page
from loan_intake.domain.money import MoneyAmount
from loan_intake.domain.repositories import CustomerRepository, LoanApplicationRepository
from loan_intake.infrastructure.database.models import CustomerRecord, LoanApplicationRecord

logger = logging.getLogger(__name__)


def to_number(value: Union[Decimal, float, int, str]) -> Decimal:
    """Normalize whatever numeric type the driver returns into a Decimal"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _aware(value: datetime) -> datetime:
    # SQLite drops the offset; stored values are always UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def customer_from_record(record: CustomerRecord) -> Customer:
    return Customer(
        id=record.id,
        full_name=record.full_name,
        email=record.email,
        created_at=_aware(record.created_at),
    )


def loan_application_from_record(record: LoanApplicationRecord) -> LoanApplication:
    return LoanApplication(
        id=record.id,
        customer_id=record.customer_id,
        amount=MoneyAmount(to_number(record.amount)),
        term_months=record.term_months,
        annual_interest_rate=to_number(record.annual_interest_rate),
        monthly_payment=MoneyAmount(to_number(record.monthly_payment)),
        created_at=_aware(record.created_at),
    )


class SqlAlchemyCustomerRepository(CustomerRepository):
    """Repository for customers backed by a SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, customer_id: uuid.UUID) -> Optional[Customer]:
        record = self.db.get(CustomerRecord, customer_id)
        return customer_from_record(record) if record else None

    def find_by_email(self, email: str) -> Optional[Customer]:
        record = self.db.execute(select(CustomerRecord).where(CustomerRecord.email == email)).scalar_one_or_none()
        return customer_from_record(record) if record else None

    def save(self, customer: Customer) -> Customer:
        """Insert or update; a duplicate email surfaces as CustomerAlreadyExistsError"""
        record = self.db.get(CustomerRecord, customer.id) if customer.id is not None else None

        if record is None:
            logger.debug("Creating new customer record")
            record = CustomerRecord(
                id=customer.id or uuid.uuid4(),
                full_name=customer.full_name,
                email=customer.email,
                created_at=customer.created_at,
            )
            self.db.add(record)
        else:
            logger.debug("Updating customer record", extra={"customer_id": str(customer.id)})
            record.full_name = customer.full_name
            record.email = customer.email

        try:
            self.db.flush()  # Get ID without committing
        except IntegrityError as e:
            raise CustomerAlreadyExistsError(customer.email) from e

        return customer_from_record(record)

    def find_all(self, skip: int = 0, take: int = 10) -> Page[Customer]:
        records = self.db.execute(
            select(CustomerRecord)
            .order_by(CustomerRecord.created_at.desc(), CustomerRecord.id)
            .offset(skip)
            .limit(take)
        ).scalars().all()
        total = self.db.execute(select(func.count()).select_from(CustomerRecord)).scalar_one()
        return Page(items=[customer_from_record(r) for r in records], total=total)

    def delete(self, customer_id: uuid.UUID) -> None:
        """Delete a customer; rows still referenced by loan applications are refused"""
        record = self.db.get(CustomerRecord, customer_id)
        if record is None:
            return

        self.db.delete(record)
        try:
            self.db.flush()
        except IntegrityError as e:
            raise CustomerHasLoanApplicationsError(customer_id) from e


class SqlAlchemyLoanApplicationRepository(LoanApplicationRepository):
    """Repository for loan applications backed by a SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, loan_application_id: uuid.UUID) -> Optional[LoanApplication]:
        record = self.db.get(LoanApplicationRecord, loan_application_id)
        return loan_application_from_record(record) if record else None

    def save(self, loan_application: LoanApplication) -> LoanApplication:
        record = (
            self.db.get(LoanApplicationRecord, loan_application.id) if loan_application.id is not None else None
        )

        if record is None:
            logger.debug("Creating new loan application record")
            record = LoanApplicationRecord(
                id=loan_application.id or uuid.uuid4(),
                created_at=loan_application.created_at,
            )
            self.db.add(record)

        record.customer_id = loan_application.customer_id
        record.amount = loan_application.amount.amount
        record.term_months = loan_application.term_months
        record.annual_interest_rate = loan_application.annual_interest_rate
        record.monthly_payment = loan_application.monthly_payment.amount

        self.db.flush()
        return loan_application_from_record(record)

    def find_all(self, skip: int = 0, take: int = 10) -> Page[LoanApplication]:
        records = self.db.execute(
            select(LoanApplicationRecord)
            .order_by(LoanApplicationRecord.created_at.desc(), LoanApplicationRecord.id)
            .offset(skip)
            .limit(take)
        ).scalars().all()
        total = self.db.execute(select(func.count()).select_from(LoanApplicationRecord)).scalar_one()
        return Page(items=[loan_application_from_record(r) for r in records], total=total)

    def find_by_customer_id(self, customer_id: uuid.UUID, skip: int = 0, take: int = 10) -> Page[LoanApplication]:
        records = self.db.execute(
            select(LoanApplicationRecord)
            .where(LoanApplicationRecord.customer_id == customer_id)
            .order_by(LoanApplicationRecord.created_at.desc(), LoanApplicationRecord.id)
            .offset(skip)
            .limit(take)
        ).scalars().all()
        total = self.db.execute(
            select(func.count())
            .select_from(LoanApplicationRecord)
            .where(LoanApplicationRecord.customer_id == customer_id)
        ).scalar_one()
        return Page(items=[loan_application_from_record(r) for r in records], total=total)

    def delete(self, loan_application_id: uuid.UUID) -> None:
        record = self.db.get(LoanApplicationRecord, loan_application_id)
        if record is not None:
            self.db.delete(record)
            self.db.flush()
