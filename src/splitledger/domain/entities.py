"""Domain model entities for splitledger.

These are pure data classes representing ledger concepts, independent of the
database schema. The store converts its rows into these entities, so the
reconciliation rules never touch ORM objects.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union


DEFAULT_PROFIT_PERCENTAGE = Decimal("20")
ZERO = Decimal("0")


class TransactionType(str, Enum):
    """Economic kind of a ledger entry."""

    SALE = "sale"
    PURCHASE = "purchase"
    EXPENSE = "expense"


class ExtraIncomeType(str, Enum):
    """Bucket that receives the whole amount of an extra-income sale."""

    CAPITAL = "capital"
    PROFIT = "profit"


@dataclass(frozen=True)
class Impact:
    """(capital, profit) contribution of a transaction or payment to the summary."""

    capital: Decimal = ZERO
    profit: Decimal = ZERO

    def __add__(self, other: "Impact") -> "Impact":
        return Impact(self.capital + other.capital, self.profit + other.profit)

    def __sub__(self, other: "Impact") -> "Impact":
        return Impact(self.capital - other.capital, self.profit - other.profit)

    def __neg__(self) -> "Impact":
        return Impact(-self.capital, -self.profit)

    @property
    def is_zero(self) -> bool:
        return self.capital == 0 and self.profit == 0


@dataclass(frozen=True)
class PaymentRecord:
    """A payment recorded against a credit transaction."""

    id: str
    date: datetime
    amount: Decimal
    note: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    """Stored ledger transaction."""

    id: str
    date: datetime
    amount: Decimal
    description: str
    type: TransactionType
    is_credit: bool = False
    is_paid: Optional[bool] = None
    amount_paid: Optional[Decimal] = None
    client_name: Optional[str] = None
    payments: tuple[PaymentRecord, ...] = ()
    is_extra_income: bool = False
    extra_income_type: Optional[ExtraIncomeType] = None

    @property
    def remaining_debt(self) -> Decimal:
        """Amount still owed on a credit transaction (zero for cash ones)."""
        if not self.is_credit:
            return ZERO
        return self.amount - (self.amount_paid or ZERO)


@dataclass(frozen=True)
class TransactionDraft:
    """Caller-supplied fields for creating or editing a transaction.

    Values are not trusted until the draft passes validation, so ``amount``
    and ``type`` may still hold raw input here.
    """

    amount: Any
    description: Any
    type: Union[TransactionType, str]
    is_credit: bool = False
    client_name: Optional[str] = None
    is_extra_income: bool = False
    extra_income_type: Optional[Union[ExtraIncomeType, str]] = None

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "TransactionDraft":
        """Build a draft carrying the mutable fields of a stored transaction."""
        return cls(
            amount=transaction.amount,
            description=transaction.description,
            type=transaction.type,
            is_credit=transaction.is_credit,
            client_name=transaction.client_name,
            is_extra_income=transaction.is_extra_income,
            extra_income_type=transaction.extra_income_type,
        )


@dataclass(frozen=True)
class NewTransaction:
    """Validated, normalized transaction fields ready to be stored."""

    amount: Decimal
    description: str
    type: TransactionType
    is_credit: bool = False
    client_name: Optional[str] = None
    is_extra_income: bool = False
    extra_income_type: Optional[ExtraIncomeType] = None


@dataclass(frozen=True)
class TransactionEdit:
    """Diff applied to a stored transaction by an edit.

    Only these fields may change on edit; date, id and payments never do.
    """

    amount: Decimal
    description: str
    type: TransactionType
    is_credit: bool
    client_name: Optional[str]
    is_extra_income: bool
    extra_income_type: Optional[ExtraIncomeType]
    amount_paid: Optional[Decimal]
    is_paid: Optional[bool]


@dataclass(frozen=True)
class PaymentAppend:
    """Diff applied to a stored credit transaction when a payment is recorded."""

    payment: PaymentRecord
    amount_paid: Decimal
    is_paid: bool


TransactionUpdate = Union[TransactionEdit, PaymentAppend]


@dataclass(frozen=True)
class FinancialSummary:
    """Running totals for one ledger owner."""

    available_capital: Decimal = ZERO
    accumulated_profits: Decimal = ZERO

    def apply(self, impact: Impact) -> "FinancialSummary":
        """Return the summary shifted by an impact."""
        return FinancialSummary(
            available_capital=self.available_capital + impact.capital,
            accumulated_profits=self.accumulated_profits + impact.profit,
        )

    def as_impact(self) -> Impact:
        return Impact(self.available_capital, self.accumulated_profits)


@dataclass(frozen=True)
class Settings:
    """Per-owner ledger settings."""

    profit_percentage: Decimal = DEFAULT_PROFIT_PERCENTAGE


@dataclass(frozen=True)
class LedgerSnapshot:
    """Consistent read of everything the full recompute needs."""

    transactions: tuple[Transaction, ...]
    settings: Settings


@dataclass(frozen=True)
class OutstandingCredit:
    """Unpaid credit transaction with its payment progress."""

    transaction: Transaction
    paid: Decimal
    remaining: Decimal
    progress: Decimal


@dataclass(frozen=True)
class TransactionBreakdown:
    """Transaction paired with its capital/profit split."""

    transaction: Transaction
    capital: Decimal
    profit: Decimal


@dataclass(frozen=True)
class DailySales:
    """Sale totals per day of one month."""

    year: int
    month: int
    totals: dict[int, Decimal] = field(default_factory=dict)

    @property
    def max_total(self) -> Decimal:
        return max(self.totals.values(), default=ZERO)
