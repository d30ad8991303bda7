"""Domain model entities for erpledger.

These are pure data classes representing ledger concepts, independent of the
remote document schema. Anything the gateway returns stays a plain
``RemoteRecord`` mapping until a mapper turns it into one of these entities,
so a change on the ERPNext side only touches the mappers.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Any, ClassVar, Optional, Union

RemoteRecord = dict[str, Any]

ZERO = Decimal("0")


class TransactionStatus(str, Enum):
    """Reconciliation status of a bank transaction."""

    UNRECONCILED = "Unreconciled"
    RECONCILED = "Reconciled"
    SETTLED = "Settled"
    PENDING = "Pending"
    CANCELLED = "Cancelled"


class DocStatus(IntEnum):
    """Lifecycle state of a submittable ledger document."""

    DRAFT = 0
    SUBMITTED = 1
    CANCELLED = 2

    @property
    def is_terminal(self) -> bool:
        return self is not DocStatus.DRAFT


class RootType(str, Enum):
    """Top-level classification of a ledger account."""

    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    INCOME = "Income"
    EXPENSE = "Expense"


@dataclass(frozen=True)
class JournalLine:
    """One debit or credit line of a journal entry."""

    account: Optional[str]
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    remark: Optional[str] = None
    reference_type: Optional[str] = None
    reference_name: Optional[str] = None


@dataclass(frozen=True)
class JournalEntryDraft:
    """Client-side journal entry that has not been created remotely yet."""

    posting_date: Optional[date]
    company: Optional[str]
    lines: tuple[JournalLine, ...] = ()
    remark: Optional[str] = None
    voucher_type: str = "Journal Entry"
    cheque_no: Optional[str] = None
    cheque_date: Optional[date] = None


@dataclass(frozen=True)
class ValidationResult:
    """Verdict of the double-entry validator."""

    valid: bool
    total_debit: Decimal
    total_credit: Decimal
    difference: Decimal
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class Created:
    """Entry was created remotely; ``submitted`` reports the optional submit step."""

    kind: ClassVar[str] = "created"

    index: int
    name: str
    submitted: bool = False
    submit_error: Optional[str] = None
    record: RemoteRecord = field(default_factory=dict, compare=False, hash=False, repr=False)


@dataclass(frozen=True)
class ValidationFailed:
    """Entry was rejected locally and never sent."""

    kind: ClassVar[str] = "validation_failed"

    index: int
    errors: tuple[str, ...]


@dataclass(frozen=True)
class GatewayFailed:
    """Entry passed validation but the remote create call failed."""

    kind: ClassVar[str] = "gateway_failed"

    index: int
    message: str


@dataclass(frozen=True)
class NotAttempted:
    """Entry was skipped because an earlier entry failed with stop-on-error."""

    kind: ClassVar[str] = "not_attempted"

    index: int


BatchItemOutcome = Union[Created, ValidationFailed, GatewayFailed, NotAttempted]


@dataclass(frozen=True)
class BatchResult:
    """Per-entry outcomes of a batch run, in input order.

    Batches are never atomic: entries reported as ``Created`` stay in the
    ledger even when later entries fail. ``atomic`` is always False and is
    exposed so callers cannot mistake a partial result for a rolled back one.
    """

    outcomes: tuple[BatchItemOutcome, ...]
    atomic: bool = field(default=False, init=False)

    @property
    def success_count(self) -> int:
        return sum(1 for o in self.outcomes if isinstance(o, Created))

    @property
    def error_count(self) -> int:
        return sum(1 for o in self.outcomes if isinstance(o, (ValidationFailed, GatewayFailed)))

    @property
    def not_attempted_count(self) -> int:
        return sum(1 for o in self.outcomes if isinstance(o, NotAttempted))

    @property
    def is_partial(self) -> bool:
        """True when some entries were created and others failed."""
        return self.success_count > 0 and self.error_count > 0

    @property
    def created_names(self) -> list[str]:
        return [o.name for o in self.outcomes if isinstance(o, Created)]


@dataclass(frozen=True)
class BankTransactionQuery:
    """Logical bank transaction search. All criteria are optional."""

    bank_account: Optional[str] = None
    company: Optional[str] = None
    status: Optional[TransactionStatus] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None


@dataclass(frozen=True)
class BankTransaction:
    """Bank transaction domain entity."""

    name: str
    date: date
    deposit: Decimal
    withdrawal: Decimal
    description: str
    status: TransactionStatus
    reference_number: Optional[str] = None
    transaction_id: Optional[str] = None
    bank_account: Optional[str] = None
    company: Optional[str] = None
    currency: Optional[str] = None

    @property
    def amount(self) -> Decimal:
        """Unsigned movement: the deposit when there is one, else the withdrawal."""
        return self.deposit if self.deposit > 0 else self.withdrawal


@dataclass(frozen=True)
class BankAccount:
    """Company bank account linked to a ledger account."""

    name: str
    account_name: str
    account: Optional[str]
    bank: Optional[str]
    company: Optional[str]
    is_company_account: bool = False
    bank_account_no: Optional[str] = None
    iban: Optional[str] = None
    is_default: bool = False
    disabled: bool = False


@dataclass(frozen=True)
class LedgerAccount:
    """Chart of accounts entry."""

    name: str
    account_name: str
    company: Optional[str]
    account_number: Optional[str] = None
    account_type: Optional[str] = None
    root_type: Optional[RootType] = None
    is_group: bool = False
    parent_account: Optional[str] = None
