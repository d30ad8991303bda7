"""In-memory ledger gateway.

Keeps documents in per-doctype lists and understands the subset of the
Frappe filter language used by erpledger. Used by the test suite and for
offline dry runs of journal files (``journal create/batch --dry-run``).
"""

import copy
import fnmatch
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from erpledger.domain.entities import DocStatus, RemoteRecord
from erpledger.domain.errors import GatewayError, document_not_found, gateway_call_failed
from erpledger.gateway.base import LedgerGateway

logger = logging.getLogger(__name__)

NAME_PREFIXES = {
    "Journal Entry": "ACC-JV",
    "Bank Transaction": "ACC-BTN",
    "Bank Account": "BA",
}


@dataclass
class _FailureRule:
    operation: str
    message: str
    predicate: Optional[Callable[[str, Any], bool]]
    status_code: int
    times: Optional[int]


def _like(value: Any, pattern: str) -> bool:
    glob = pattern.replace("%", "*").replace("_", "?")
    return fnmatch.fnmatchcase(str(value).lower(), glob.lower())


def _compare(value: Any, operator: str, operand: Any) -> bool:
    if operator in ("=", "=="):
        return value == operand
    if operator == "!=":
        return value != operand
    if operator == "in":
        return value in operand
    if operator == "not in":
        return value not in operand
    if operator == "like":
        return value is not None and _like(value, operand)
    if operator == "not like":
        return value is None or not _like(value, operand)
    if value is None:
        return False
    if operator == ">":
        return value > operand
    if operator == ">=":
        return value >= operand
    if operator == "<":
        return value < operand
    if operator == "<=":
        return value <= operand
    if operator == "between":
        low, high = operand
        return low <= value <= high
    raise GatewayError(gateway_call_failed("filter documents", f"unsupported operator '{operator}'"))


def _matches(record: RemoteRecord, filters: dict[str, Any]) -> bool:
    for field_name, condition in filters.items():
        value = record.get(field_name)
        if isinstance(condition, (list, tuple)) and len(condition) == 2 and isinstance(condition[0], str):
            if not _compare(value, condition[0].lower(), condition[1]):
                return False
        elif value != condition:
            return False
    return True


class InMemoryGateway(LedgerGateway):
    """Dict-backed ledger gateway with Frappe-like naming and docstatus."""

    def __init__(self, authenticated: bool = True):
        self._documents: dict[str, list[RemoteRecord]] = {}
        self._counters: dict[str, int] = {}
        self._methods: dict[str, Callable[..., Any]] = {}
        self._reports: dict[str, Callable[..., Any]] = {}
        self._failures: list[_FailureRule] = []
        self._authenticated = authenticated
        self.calls: list[tuple[str, str]] = []

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    # Test and seeding helpers
    def add_document(self, doctype: str, record: dict[str, Any]) -> str:
        """Store a document as-is (no failure rules apply). Returns its name."""
        stored = copy.deepcopy(record)
        if not stored.get("name"):
            stored["name"] = self._next_name(doctype)
        stored.setdefault("docstatus", DocStatus.DRAFT.value)
        stored.setdefault("doctype", doctype)
        self._documents.setdefault(doctype, []).append(stored)
        return stored["name"]

    def register_method(self, method: str, handler: Callable[..., Any]) -> None:
        """Serve ``call_method(method, params)`` with ``handler(**params)``."""
        self._methods[method] = handler

    def register_report(self, report_name: str, handler: Callable[..., Any]) -> None:
        """Serve ``run_report(report_name, filters)`` with ``handler(filters)``."""
        self._reports[report_name] = handler

    def fail_when(
        self,
        operation: str,
        message: str,
        predicate: Optional[Callable[[str, Any], bool]] = None,
        status_code: int = 417,
        times: Optional[int] = None,
    ) -> None:
        """Make matching calls raise GatewayError.

        Args:
            operation: One of list, get, create, update, submit, call, report
            message: Error reason reported by the fake server
            predicate: Called with (doctype or method, payload/name/params);
                the rule applies only when it returns True
            status_code: HTTP status attached to the error
            times: Apply at most this many times (None for always)
        """
        self._failures.append(_FailureRule(operation, message, predicate, status_code, times))

    def documents(self, doctype: str) -> list[RemoteRecord]:
        """Return copies of all stored documents of a doctype."""
        return copy.deepcopy(self._documents.get(doctype, []))

    def _next_name(self, doctype: str) -> str:
        self._counters[doctype] = self._counters.get(doctype, 0) + 1
        prefix = NAME_PREFIXES.get(doctype) or "".join(w[0] for w in doctype.split()).upper()
        return f"{prefix}-{self._counters[doctype]:05d}"

    def _record_call(self, operation: str, target: str, data: Any, action: str) -> None:
        self.calls.append((operation, target))
        for rule in self._failures:
            if rule.operation != operation:
                continue
            if rule.predicate is not None and not rule.predicate(target, data):
                continue
            if rule.times is not None:
                if rule.times <= 0:
                    continue
                rule.times -= 1
            logger.debug("Injected failure for %s %s", operation, target)
            raise GatewayError(gateway_call_failed(action, rule.message), status_code=rule.status_code)

    def _find(self, doctype: str, name: str) -> RemoteRecord:
        for record in self._documents.get(doctype, []):
            if record.get("name") == name:
                return record
        raise GatewayError(
            gateway_call_failed(f"get {doctype} {name}", document_not_found(doctype, name)),
            status_code=404,
        )

    # LedgerGateway implementation
    def list_documents(
        self,
        doctype: str,
        filters: Optional[dict[str, Any]] = None,
        fields: Optional[list[str]] = None,
        limit: Optional[int] = None,
    ) -> list[RemoteRecord]:
        self._record_call("list", doctype, filters, f"get {doctype} list")
        records = [r for r in self._documents.get(doctype, []) if _matches(r, filters or {})]
        if limit:
            records = records[:limit]
        if fields:
            return [{f: copy.deepcopy(r.get(f)) for f in fields} for r in records]
        return copy.deepcopy(records)

    def get_document(self, doctype: str, name: str) -> RemoteRecord:
        self._record_call("get", doctype, name, f"get {doctype} {name}")
        return copy.deepcopy(self._find(doctype, name))

    def create_document(self, doctype: str, payload: dict[str, Any]) -> RemoteRecord:
        self._record_call("create", doctype, payload, f"create {doctype}")
        name = self.add_document(doctype, {**payload, "docstatus": DocStatus.DRAFT.value})
        return copy.deepcopy(self._find(doctype, name))

    def update_document(self, doctype: str, name: str, payload: dict[str, Any]) -> RemoteRecord:
        action = f"update {doctype} {name}"
        self._record_call("update", doctype, name, action)
        record = self._find(doctype, name)
        if DocStatus(record.get("docstatus", 0)).is_terminal:
            raise GatewayError(
                gateway_call_failed(action, "Cannot edit a submitted or cancelled document"),
                status_code=417,
            )
        record.update({k: copy.deepcopy(v) for k, v in payload.items() if k not in ("name", "docstatus")})
        return copy.deepcopy(record)

    def submit_document(self, doctype: str, name: str) -> RemoteRecord:
        action = f"submit {doctype} {name}"
        self._record_call("submit", doctype, name, action)
        record = self._find(doctype, name)
        if DocStatus(record.get("docstatus", 0)) is not DocStatus.DRAFT:
            raise GatewayError(
                gateway_call_failed(action, "Cannot submit a document that is not a draft"),
                status_code=417,
            )
        record["docstatus"] = DocStatus.SUBMITTED.value
        return copy.deepcopy(record)

    def call_method(self, method: str, params: Optional[dict[str, Any]] = None) -> Any:
        action = f"call method {method}"
        self._record_call("call", method, params, action)
        handler = self._methods.get(method)
        if handler is None:
            raise GatewayError(
                gateway_call_failed(action, f"method {method} not found"), status_code=404
            )
        return handler(**(params or {}))

    def run_report(self, report_name: str, filters: Optional[dict[str, Any]] = None) -> Any:
        action = f"run report {report_name}"
        self._record_call("report", report_name, filters, action)
        handler = self._reports.get(report_name)
        if handler is None:
            raise GatewayError(
                gateway_call_failed(action, f"report {report_name} not found"), status_code=404
            )
        return handler(filters or {})
