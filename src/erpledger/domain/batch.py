"""Sequential batch creation of journal entries.

The ledger has no cross-document transaction, so a batch is a plain loop:
each entry is validated, created and optionally submitted before the next
one starts. Entries already created stay created when a later entry fails,
and re-running a batch creates them again; callers get one outcome per
entry to decide what to do about that.
"""

import logging
from typing import Sequence

from erpledger.domain.entities import (
    BatchItemOutcome,
    BatchResult,
    Created,
    GatewayFailed,
    JournalEntryDraft,
    NotAttempted,
    ValidationFailed,
)
from erpledger.domain.errors import GatewayError, StructuralInputError
from erpledger.domain.journal_entry import JournalEntryService
from erpledger.gateway.base import LedgerGateway

logger = logging.getLogger(__name__)


class BatchOrchestrator:
    """Creates many journal entries with per-entry outcomes."""

    def __init__(self, gateway: LedgerGateway):
        """Initialize batch orchestrator.

        Args:
            gateway: Ledger gateway instance
        """
        self.gateway = gateway
        self.journal_entries = JournalEntryService(gateway)

    def run(
        self,
        entries: Sequence[JournalEntryDraft],
        auto_submit: bool = False,
        stop_on_error: bool = False,
    ) -> BatchResult:
        """Validate and create each entry in input order.

        Args:
            entries: Drafts to create
            auto_submit: Submit each entry after it is created. A failed
                submit leaves the entry created as a draft and is recorded on
                its Created outcome; it does not count as an error
            stop_on_error: After the first validation or create failure, mark
                all remaining entries NotAttempted without touching them

        Returns:
            BatchResult with exactly one outcome per entry, in input order

        Raises:
            StructuralInputError: If entries is empty (no gateway call is made)
        """
        if not entries:
            raise StructuralInputError("entries must contain at least one journal entry")

        outcomes: list[BatchItemOutcome] = []
        stopped = False
        for index, draft in enumerate(entries):
            if stopped:
                outcomes.append(NotAttempted(index=index))
                continue

            outcome = self._process(index, draft, auto_submit)
            outcomes.append(outcome)
            if stop_on_error and isinstance(outcome, (ValidationFailed, GatewayFailed)):
                logger.warning("Stopping batch after entry %d failed", index)
                stopped = True

        result = BatchResult(outcomes=tuple(outcomes))
        logger.info(
            "Batch finished: %d created, %d failed, %d not attempted",
            result.success_count,
            result.error_count,
            result.not_attempted_count,
        )
        return result

    def _process(self, index: int, draft: JournalEntryDraft, auto_submit: bool) -> BatchItemOutcome:
        validation = self.journal_entries.validate(draft)
        if not validation.valid:
            logger.warning("Entry %d failed validation: %s", index, "; ".join(validation.errors))
            return ValidationFailed(index=index, errors=validation.errors)

        try:
            record = self.journal_entries.create(draft, skip_validation=True)
        except GatewayError as e:
            logger.warning("Entry %d was not created: %s", index, e)
            return GatewayFailed(index=index, message=str(e))

        name = record["name"]
        if not auto_submit:
            return Created(index=index, name=name, record=record)

        try:
            submitted = self.journal_entries.submit(name)
        except GatewayError as e:
            logger.warning("Entry %d (%s) was created but not submitted: %s", index, name, e)
            return Created(index=index, name=name, submitted=False, submit_error=str(e), record=record)
        return Created(index=index, name=name, submitted=True, record=submitted or record)
