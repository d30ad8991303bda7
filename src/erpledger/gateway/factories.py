"""Gateway factory functions for creating ledger gateways."""

import os
from typing import Optional

from erpledger.domain.errors import ConfigurationError
from erpledger.gateway.http import DEFAULT_TIMEOUT, HTTPGateway


def create_http_gateway(
    url: Optional[str] = None,
    api_key: Optional[str] = None,
    api_secret: Optional[str] = None,
    timeout: Optional[float] = None,
) -> HTTPGateway:
    """Create an HTTP gateway for an ERPNext site.

    Args:
        url: Site URL. If None, checks the ERPNEXT_URL environment variable
        api_key: API key. If None, checks ERPNEXT_API_KEY
        api_secret: API secret. If None, checks ERPNEXT_API_SECRET
        timeout: Request timeout in seconds. If None, checks ERPNEXT_TIMEOUT,
            then defaults to 30 seconds

    Returns:
        HTTPGateway instance (unauthenticated when key or secret is missing)

    Raises:
        ConfigurationError: If no URL is configured or the timeout is invalid
    """
    if url is None:
        url = os.environ.get("ERPNEXT_URL")
    if not url:
        raise ConfigurationError("ERPNEXT_URL environment variable is required")

    if api_key is None:
        api_key = os.environ.get("ERPNEXT_API_KEY")
    if api_secret is None:
        api_secret = os.environ.get("ERPNEXT_API_SECRET")

    if timeout is None:
        raw_timeout = os.environ.get("ERPNEXT_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError:
            raise ConfigurationError(f"Invalid ERPNEXT_TIMEOUT value: {raw_timeout}")

    return HTTPGateway(url, api_key=api_key, api_secret=api_secret, timeout=timeout)
