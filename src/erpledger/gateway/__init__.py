"""Ledger gateway layer for erpledger."""

from erpledger.gateway.base import LedgerGateway
from erpledger.gateway.factories import create_http_gateway
from erpledger.gateway.http import HTTPGateway
from erpledger.gateway.memory import InMemoryGateway

__all__ = ["LedgerGateway", "HTTPGateway", "InMemoryGateway", "create_http_gateway"]
