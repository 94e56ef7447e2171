"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the reconciliation rules only
ever see domain entities.
"""

from splitledger.domain import entities as domain
from splitledger.database.models import (
    Transaction as ORMTransaction,
    Payment as ORMPayment,
    Summary as ORMSummary,
    OwnerSettings as ORMSettings,
)


def payment_to_domain(orm_payment: ORMPayment) -> domain.PaymentRecord:
    """Convert SQLAlchemy Payment model to domain PaymentRecord entity."""
    return domain.PaymentRecord(
        id=orm_payment.payment_id,
        date=orm_payment.date,
        amount=orm_payment.amount,
        note=orm_payment.note,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    extra_income_type = orm_transaction.extra_income_type
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        amount=orm_transaction.amount,
        description=orm_transaction.description,
        type=domain.TransactionType(orm_transaction.type),
        is_credit=orm_transaction.is_credit,
        is_paid=orm_transaction.is_paid,
        amount_paid=orm_transaction.amount_paid,
        client_name=orm_transaction.client_name,
        payments=tuple(payment_to_domain(p) for p in orm_transaction.payments),
        is_extra_income=orm_transaction.is_extra_income,
        extra_income_type=(
            domain.ExtraIncomeType(extra_income_type) if extra_income_type else None
        ),
    )


def summary_to_domain(orm_summary: ORMSummary) -> domain.FinancialSummary:
    """Convert SQLAlchemy Summary model to domain FinancialSummary entity."""
    return domain.FinancialSummary(
        available_capital=orm_summary.available_capital,
        accumulated_profits=orm_summary.accumulated_profits,
    )


def settings_to_domain(orm_settings: ORMSettings) -> domain.Settings:
    """Convert SQLAlchemy OwnerSettings model to domain Settings entity."""
    return domain.Settings(profit_percentage=orm_settings.profit_percentage)


def apply_transaction_update(
    orm_transaction: ORMTransaction, update: domain.TransactionUpdate
) -> None:
    """Copy exactly the fields named by an update diff onto an ORM row."""
    if isinstance(update, domain.TransactionEdit):
        orm_transaction.amount = update.amount
        orm_transaction.description = update.description
        orm_transaction.type = update.type.value
        orm_transaction.is_credit = update.is_credit
        orm_transaction.client_name = update.client_name
        orm_transaction.is_extra_income = update.is_extra_income
        orm_transaction.extra_income_type = (
            update.extra_income_type.value if update.extra_income_type else None
        )
        orm_transaction.amount_paid = update.amount_paid
        orm_transaction.is_paid = update.is_paid
    elif isinstance(update, domain.PaymentAppend):
        payment = update.payment
        orm_transaction.payments.append(
            ORMPayment(
                payment_id=payment.id,
                position=len(orm_transaction.payments),
                date=payment.date,
                amount=payment.amount,
                note=payment.note,
            )
        )
        orm_transaction.amount_paid = update.amount_paid
        orm_transaction.is_paid = update.is_paid
    else:
        raise TypeError(f"Unsupported transaction update: {type(update).__name__}")
