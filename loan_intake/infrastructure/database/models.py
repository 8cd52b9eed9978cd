"""SQLAlchemy ORM models for customers and loan applications"""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, Text, Uuid
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class CustomerRecord(Base):
    """Loan applicant"""

    __tablename__ = "customers"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    full_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    loan_applications = relationship("LoanApplicationRecord", back_populates="customer", passive_deletes="all")


class LoanApplicationRecord(Base):
    """Loan application with its computed monthly payment"""

    __tablename__ = "loan_applications"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    customer_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("customers.id", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
    amount = Column(Numeric(14, 2), nullable=False)
    term_months = Column(Integer, nullable=False)
    annual_interest_rate = Column(Numeric(7, 4), nullable=False)
    monthly_payment = Column(Numeric(14, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    customer = relationship("CustomerRecord", back_populates="loan_applications")
