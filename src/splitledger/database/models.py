"""SQLAlchemy models for the splitledger database."""

from datetime import datetime
from decimal import Decimal
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session
from sqlalchemy.types import TypeDecorator

Base = declarative_base()


class DecimalText(TypeDecorator):
    """Decimal stored as its exact text so values round-trip without float drift."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


class IsoDateTime(TypeDecorator):
    """Timestamp stored as ISO-8601 text, keeping its UTC offset."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return value.isoformat()

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return datetime.fromisoformat(value)


class Transaction(Base):
    """Ledger transaction model."""

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    owner_id = Column(String, nullable=False, index=True)
    date = Column(IsoDateTime, nullable=False)
    amount = Column(DecimalText, nullable=False)
    description = Column(String, nullable=False)
    type = Column(String, nullable=False)
    is_credit = Column(Boolean, default=False, nullable=False)
    is_paid = Column(Boolean, nullable=True)
    amount_paid = Column(DecimalText, nullable=True)
    client_name = Column(String, nullable=True)
    is_extra_income = Column(Boolean, default=False, nullable=False)
    extra_income_type = Column(String, nullable=True)
    version = Column(Integer, default=0, nullable=False)

    # Relationships
    payments = relationship(
        "Payment",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="Payment.position",
    )


class Payment(Base):
    """Payment recorded against a credit transaction."""

    __tablename__ = "payments"

    row_id = Column(Integer, primary_key=True)
    transaction_id = Column(String, ForeignKey("transactions.id"), nullable=False, index=True)
    payment_id = Column(String, nullable=False)
    position = Column(Integer, nullable=False)
    date = Column(IsoDateTime, nullable=False)
    amount = Column(DecimalText, nullable=False)
    note = Column(String, nullable=True)

    # Relationships
    transaction = relationship("Transaction", back_populates="payments")


class Summary(Base):
    """Running capital/profit totals, one row per owner."""

    __tablename__ = "summaries"

    owner_id = Column(String, primary_key=True)
    available_capital = Column(DecimalText, nullable=False)
    accumulated_profits = Column(DecimalText, nullable=False)
    version = Column(Integer, default=0, nullable=False)


class OwnerSettings(Base):
    """Per-owner settings."""

    __tablename__ = "settings"

    owner_id = Column(String, primary_key=True)
    profit_percentage = Column(DecimalText, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
