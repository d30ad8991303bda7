"""Frappe/ERPNext REST gateway."""

import json
import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from erpledger.domain.entities import RemoteRecord
from erpledger.domain.errors import GatewayError, gateway_call_failed
from erpledger.gateway.base import LedgerGateway

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

SUBMIT_METHOD = "frappe.client.submit"
REPORT_METHOD = "frappe.desk.query_report.run"


def _error_message(response: httpx.Response) -> str:
    """Extract the most useful error text from a Frappe error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase

    if isinstance(body, dict):
        server_messages = body.get("_server_messages")
        if server_messages:
            try:
                messages = [json.loads(m).get("message", m) for m in json.loads(server_messages)]
                return "; ".join(str(m) for m in messages)
            except (ValueError, TypeError, AttributeError):
                return str(server_messages)
        for key in ("exception", "message", "exc_type"):
            if body.get(key):
                return str(body[key])
    return response.reason_phrase


class HTTPGateway(LedgerGateway):
    """Ledger gateway talking to the Frappe REST API over httpx.

    Documents live under ``/api/resource/<doctype>`` and server methods under
    ``/api/method/<dotted.path>``. Authentication uses Frappe API tokens
    (``Authorization: token <key>:<secret>``). The gateway does not retry.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize HTTP gateway.

        Args:
            base_url: ERPNext site URL; a trailing slash is ignored
            api_key: API key of the integration user
            api_secret: API secret of the integration user
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used for testing)
        """
        self.base_url = base_url.rstrip("/")
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        self._authenticated = bool(api_key and api_secret)
        if self._authenticated:
            headers["Authorization"] = f"token {api_key}:{api_secret}"

        self.client = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    def close(self) -> None:
        self.client.close()

    def _request(
        self,
        method: str,
        path: str,
        action: str,
        params: Optional[dict[str, Any]] = None,
        payload: Optional[dict[str, Any]] = None,
    ) -> Any:
        logger.debug("%s %s", method, path)
        try:
            response = self.client.request(method, path, params=params, json=payload)
        except httpx.HTTPError as e:
            logger.warning("Request %s %s failed: %s", method, path, e)
            raise GatewayError(gateway_call_failed(action, str(e) or type(e).__name__)) from e

        if response.is_error:
            reason = _error_message(response)
            logger.warning("%s %s returned %s: %s", method, path, response.status_code, reason)
            raise GatewayError(
                gateway_call_failed(action, reason), status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            raise GatewayError(
                gateway_call_failed(action, "response is not valid JSON"),
                status_code=response.status_code,
            ) from e

    @staticmethod
    def _resource_path(doctype: str, name: Optional[str] = None) -> str:
        path = f"/api/resource/{quote(doctype)}"
        if name is not None:
            path += f"/{quote(name, safe='')}"
        return path

    def list_documents(
        self,
        doctype: str,
        filters: Optional[dict[str, Any]] = None,
        fields: Optional[list[str]] = None,
        limit: Optional[int] = None,
    ) -> list[RemoteRecord]:
        params: dict[str, Any] = {}
        if fields:
            params["fields"] = json.dumps(fields)
        if filters:
            params["filters"] = json.dumps(filters)
        if limit is not None:
            params["limit_page_length"] = limit

        body = self._request(
            "GET", self._resource_path(doctype), f"get {doctype} list", params=params
        )
        return body.get("data", [])

    def get_document(self, doctype: str, name: str) -> RemoteRecord:
        body = self._request("GET", self._resource_path(doctype, name), f"get {doctype} {name}")
        return body.get("data", {})

    def create_document(self, doctype: str, payload: dict[str, Any]) -> RemoteRecord:
        body = self._request(
            "POST", self._resource_path(doctype), f"create {doctype}", payload={"data": payload}
        )
        return body.get("data", {})

    def update_document(self, doctype: str, name: str, payload: dict[str, Any]) -> RemoteRecord:
        body = self._request(
            "PUT",
            self._resource_path(doctype, name),
            f"update {doctype} {name}",
            payload={"data": payload},
        )
        return body.get("data", {})

    def submit_document(self, doctype: str, name: str) -> RemoteRecord:
        doc = json.dumps({"doctype": doctype, "name": name})
        return self.call_method(SUBMIT_METHOD, {"doc": doc})

    def call_method(self, method: str, params: Optional[dict[str, Any]] = None) -> Any:
        body = self._request(
            "POST", f"/api/method/{method}", f"call method {method}", payload=params or {}
        )
        if isinstance(body, dict) and "message" in body:
            return body["message"]
        return body

    def run_report(self, report_name: str, filters: Optional[dict[str, Any]] = None) -> Any:
        params: dict[str, Any] = {"report_name": report_name}
        if filters:
            params["filters"] = json.dumps(filters)
        body = self._request(
            "GET", f"/api/method/{REPORT_METHOD}", f"run report {report_name}", params=params
        )
        return body.get("message", body) if isinstance(body, dict) else body
