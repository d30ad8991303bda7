"""Double-entry validation for journal entry drafts."""

from decimal import Decimal

from erpledger.domain.entities import JournalEntryDraft, ValidationResult, ZERO
from erpledger.utils.amount_parser import CENT, to_cents

BALANCE_TOLERANCE = CENT


def validate_journal_entry(draft: JournalEntryDraft) -> ValidationResult:
    """Check that a draft is complete and that its debits equal its credits.

    Structural problems (missing posting date, company, lines or accounts)
    and balance problems are both reported in ``errors``. A line carrying
    both a debit and a credit is only a warning. The draft is not modified
    and no gateway is involved, so the same draft always yields the same
    result.

    Args:
        draft: Journal entry draft to check

    Returns:
        ValidationResult with rounded totals, errors and warnings
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not draft.posting_date:
        errors.append("posting_date is required")

    if not draft.company:
        errors.append("company is required")

    if not draft.lines:
        errors.append("at least one account entry is required")
        return ValidationResult(
            valid=False,
            total_debit=ZERO,
            total_credit=ZERO,
            difference=ZERO,
            errors=tuple(errors),
            warnings=tuple(warnings),
        )

    if len(draft.lines) < 2:
        errors.append("journal entry must have at least 2 account entries")

    total_debit = Decimal("0")
    total_credit = Decimal("0")
    for line in draft.lines:
        if not line.account:
            errors.append("account is required for all entries")
            continue

        debit = line.debit or ZERO
        credit = line.credit or ZERO
        total_debit += debit
        total_credit += credit

        if debit != 0 and credit != 0:
            warnings.append(f"Account {line.account} has both debit and credit - this is unusual")
        elif debit == 0 and credit == 0:
            errors.append(f"Account {line.account} has neither debit nor credit")

    total_debit = to_cents(total_debit)
    total_credit = to_cents(total_credit)
    difference = to_cents(total_debit - total_credit)

    if abs(difference) > BALANCE_TOLERANCE:
        errors.append(
            f"Debits ({total_debit}) do not equal credits ({total_credit}). "
            f"Difference: {difference}"
        )

    return ValidationResult(
        valid=not errors,
        total_debit=total_debit,
        total_credit=total_credit,
        difference=difference,
        errors=tuple(errors),
        warnings=tuple(warnings),
    )
