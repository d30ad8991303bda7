"""Abstract ledger gateway interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from erpledger.domain.entities import RemoteRecord


class LedgerGateway(ABC):
    """Abstract access to the remote ledger's documents and methods.

    Implementations own transport, authentication and timeouts. Every failed
    call raises ``GatewayError``; callers never retry on their own.
    """

    @property
    def is_authenticated(self) -> bool:
        """Whether the gateway has credentials for the ledger."""
        return True

    def close(self) -> None:
        """Release any held resources."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # Document operations
    @abstractmethod
    def list_documents(
        self,
        doctype: str,
        filters: Optional[dict[str, Any]] = None,
        fields: Optional[list[str]] = None,
        limit: Optional[int] = None,
    ) -> list[RemoteRecord]:
        """List documents of a doctype.

        Args:
            doctype: Document type, e.g. "Bank Transaction"
            filters: Field filters; values are either a literal (equality)
                or an ``[operator, operand]`` pair such as ``[">=", "2024-01-01"]``
            fields: Fields to return (implementation default when None)
            limit: Maximum number of records; 0 means no limit
        """
        pass

    @abstractmethod
    def get_document(self, doctype: str, name: str) -> RemoteRecord:
        """Get a single document by name."""
        pass

    @abstractmethod
    def create_document(self, doctype: str, payload: dict[str, Any]) -> RemoteRecord:
        """Create a document. Returns the created record including its name."""
        pass

    @abstractmethod
    def update_document(self, doctype: str, name: str, payload: dict[str, Any]) -> RemoteRecord:
        """Update fields of an existing draft document."""
        pass

    @abstractmethod
    def submit_document(self, doctype: str, name: str) -> RemoteRecord:
        """Submit a draft document, moving it to the terminal Submitted state."""
        pass

    # Remote procedures
    @abstractmethod
    def call_method(self, method: str, params: Optional[dict[str, Any]] = None) -> Any:
        """Invoke a whitelisted server method such as a balance lookup."""
        pass

    @abstractmethod
    def run_report(self, report_name: str, filters: Optional[dict[str, Any]] = None) -> Any:
        """Run a query report and return its raw result."""
        pass
