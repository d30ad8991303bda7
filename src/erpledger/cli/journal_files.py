"""CLI helpers for reading journal entry JSON files."""

import json
from typing import IO

from erpledger.domain.entities import JournalEntryDraft
from erpledger.domain.errors import StructuralInputError
from erpledger.gateway.mappers import draft_from_dict


def _load_json(stream: IO[str]):
    try:
        return json.load(stream)
    except json.JSONDecodeError as e:
        raise StructuralInputError(f"Invalid JSON in {getattr(stream, 'name', 'input')}: {e}")


def load_draft(stream: IO[str]) -> JournalEntryDraft:
    """Read a single ERPNext-shaped journal entry object."""
    data = _load_json(stream)
    if isinstance(data, dict) and "journal_entry" in data:
        data = data["journal_entry"]
    return draft_from_dict(data)


def load_drafts(stream: IO[str]) -> list[JournalEntryDraft]:
    """Read a batch of journal entries.

    Accepts a JSON list of entries, ``{"entries": [...]}``, or a single
    entry object (a batch of one).
    """
    data = _load_json(stream)
    if isinstance(data, dict):
        data = data.get("entries", [data])
    if not isinstance(data, list):
        raise StructuralInputError("batch file must contain a list of journal entries")
    return [draft_from_dict(item) for item in data]
