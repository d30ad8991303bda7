"""Chart of accounts domain service."""

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from erpledger.domain.entities import LedgerAccount, RemoteRecord, RootType
from erpledger.domain.errors import StructuralInputError, missing_argument
from erpledger.gateway.base import LedgerGateway
from erpledger.gateway.mappers import ACCOUNT, COMPANY, ledger_account_to_domain
from erpledger.utils.amount_parser import parse_amount
from erpledger.utils.date_parser import format_date

TREE_METHOD = "frappe.desk.treeview.get_children"
BALANCE_METHOD = "erpnext.accounts.utils.get_balance_on"
TRIAL_BALANCE_REPORT = "Trial Balance"

ACCOUNT_FIELDS = [
    "name",
    "account_name",
    "account_number",
    "account_type",
    "root_type",
    "is_group",
    "parent_account",
    "company",
]


class AccountService:
    """Read-only access to companies and the chart of accounts."""

    def __init__(self, gateway: LedgerGateway):
        """Initialize account service.

        Args:
            gateway: Ledger gateway instance
        """
        self.gateway = gateway

    def list_companies(self) -> list[RemoteRecord]:
        """List companies with their abbreviation, parent company and currency."""
        return self.gateway.list_documents(
            COMPANY, fields=["name", "abbr", "parent_company", "default_currency"]
        )

    def get_account_tree(self, company: str, parent: Optional[str] = None) -> list[RemoteRecord]:
        """Get one level of the account tree.

        Args:
            company: Company name
            parent: Parent account; None or "" for the root accounts

        Returns:
            Child nodes as returned by the ledger (``value``, ``expandable`` ...)
        """
        if not company:
            raise StructuralInputError(missing_argument("company"))

        params: dict[str, Any] = {"doctype": ACCOUNT, "company": company}
        if parent:
            params["parent"] = parent
        else:
            params["parent"] = ""
            params["is_root"] = True
        return self.gateway.call_method(TREE_METHOD, params)

    def get_balance(self, account: str, on_date: Optional[date] = None) -> Decimal:
        """Get an account balance as of a date (today by default)."""
        if not account:
            raise StructuralInputError(missing_argument("account"))

        balance_date = on_date or date.today()
        balance = self.gateway.call_method(
            BALANCE_METHOD, {"account": account, "date": format_date(balance_date)}
        )
        return parse_amount(balance)

    def get_trial_balance(
        self, company: str, as_of: Optional[date] = None, show_zero_balances: bool = False
    ) -> Any:
        """Run the Trial Balance report from the start of the fiscal year.

        The fiscal year is assumed to be the calendar year of ``as_of``.
        Rows whose debit and credit are both zero are dropped unless
        ``show_zero_balances`` is set.
        """
        if not company:
            raise StructuralInputError(missing_argument("company"))

        as_of = as_of or date.today()
        fiscal_year = str(as_of.year)
        filters = {
            "company": company,
            "fiscal_year": fiscal_year,
            "from_date": f"{fiscal_year}-01-01",
            "to_date": format_date(as_of),
            "with_period_closing_entry": 0,
        }
        result = self.gateway.run_report(TRIAL_BALANCE_REPORT, filters)

        if not show_zero_balances and isinstance(result, dict) and result.get("result"):
            result["result"] = [row for row in result["result"] if _has_balance(row)]
        return result

    def search_accounts(self, company: str, query: str, limit: int = 10) -> list[LedgerAccount]:
        """Find accounts whose name (which embeds the number) contains query."""
        if not company:
            raise StructuralInputError(missing_argument("company"))
        if not query:
            raise StructuralInputError(missing_argument("query"))

        records = self.gateway.list_documents(
            ACCOUNT,
            filters={"company": company, "name": ["like", f"%{query}%"]},
            fields=ACCOUNT_FIELDS,
            limit=limit,
        )
        return [ledger_account_to_domain(r) for r in records]

    def list_accounts(
        self,
        company: str,
        account_type: Optional[str] = None,
        root_type: Optional[RootType] = None,
        include_groups: bool = False,
    ) -> list[LedgerAccount]:
        """List accounts filtered by account type and/or root type.

        Group accounts are excluded unless ``include_groups`` is set.
        """
        if not company:
            raise StructuralInputError(missing_argument("company"))

        filters: dict[str, Any] = {"company": company}
        if account_type:
            filters["account_type"] = account_type
        if root_type:
            filters["root_type"] = root_type.value
        if not include_groups:
            filters["is_group"] = 0

        records = self.gateway.list_documents(ACCOUNT, filters=filters, fields=ACCOUNT_FIELDS, limit=0)
        return [ledger_account_to_domain(r) for r in records]


def _has_balance(row: Any) -> bool:
    if not isinstance(row, dict):
        return True
    try:
        debit = parse_amount(row.get("debit"))
        credit = parse_amount(row.get("credit"))
    except ValueError:
        return True
    return debit != 0 or credit != 0
