"""Base HTTP client with retry logic for external services."""

import httpx
from typing import Optional, Dict, Any
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    wait_fixed,
    retry_if_exception_type
)

from ..utils.config import get_config
from ..utils.logger import get_api_logger


class BaseClient:
    """httpx client that retries timeouts and network failures."""

    def __init__(self, base_url: str, headers: Optional[Dict[str, str]] = None):
        """
        Initialize base client.

        Args:
            base_url: Base URL for API requests
            headers: Optional default headers
        """
        self.base_url = base_url.rstrip("/")
        self.config = get_config()
        self.logger = get_api_logger()

        default_headers = {
            "Content-Type": "application/json",
            "User-Agent": "StockMaster/1.0"
        }
        if headers:
            default_headers.update(headers)

        self.client = httpx.Client(
            base_url=self.base_url,
            headers=default_headers,
            timeout=self.config.api.timeout,
            follow_redirects=True
        )

    def _wait_strategy(self):
        api = self.config.api
        if api.exponential_backoff:
            return wait_exponential(multiplier=api.retry_delay)
        return wait_fixed(api.retry_delay)

    def request(self, method: str, endpoint: str, **kwargs) -> httpx.Response:
        """
        Send a request, retrying transport failures only.

        HTTP error statuses are returned to the caller untouched.

        Raises:
            httpx.TimeoutException, httpx.NetworkError: After the last attempt
        """
        @retry(
            stop=stop_after_attempt(self.config.api.max_retries),
            wait=self._wait_strategy(),
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
            reraise=True
        )
        def _send():
            self.logger.debug(f"{method} {endpoint}")
            response = self.client.request(method, endpoint, **kwargs)
            self.logger.debug(f"Response: {response.status_code}")
            return response

        return _send()

    def post_json(self, endpoint: str, payload: Dict[str, Any], **kwargs) -> httpx.Response:
        return self.request("POST", endpoint, json=payload, **kwargs)

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
