"""
Billing platform API client.

This module wraps the directory endpoints (countries, address validation,
subdivisions, counties) and the account endpoints used by the importers.
"""

import json
import logging
from typing import Dict, List, Optional, Any, Union

import requests
from pydantic import ValidationError as PydanticValidationError

from ...address.models import RemoteAddress, ValidationOutcome
from ...config import SonarConfig, get_sonar_config

logger = logging.getLogger(__name__)


class SonarError(Exception):
    """Base exception for billing platform API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(SonarError):
    """Authentication related errors."""
    pass


class SonarValidationError(SonarError):
    """The API rejected the submitted data."""
    pass


class SonarServerError(SonarError):
    """5xx responses."""
    pass


class SonarConnectionError(SonarError):
    """Network failures and timeouts."""
    pass


def _error_message(body: Any) -> Optional[str]:
    """Pull the human-readable message out of an API error body."""
    if not isinstance(body, dict):
        return None

    error = body.get("error")
    if isinstance(error, dict) and error.get("message") is not None:
        message = error["message"]
        if isinstance(message, dict):
            parts = []
            for value in message.values():
                parts.extend(value if isinstance(value, list) else [value])
            return ", ".join(str(part) for part in parts)
        if isinstance(message, list):
            return ", ".join(str(part) for part in message)
        return str(message)

    data = body.get("data")
    if isinstance(data, str):
        return data
    return None


class SonarClient:
    """Synchronous client for the billing platform API."""

    def __init__(self, config: Optional[SonarConfig] = None, session: Optional[requests.Session] = None):
        """Initialize the client.

        Args:
            config: API configuration (defaults to the global config)
            session: Pre-built session, mainly for tests
        """
        self.config = config or get_sonar_config()
        self.base_url = self.config.api_base_url
        self.timeout = self.config.timeout

        self.session = session or requests.Session()
        self.session.auth = (self.config.username, self.config.password)
        self.session.headers.update({
            "Content-Type": "application/json; charset=UTF8",
            "Accept": "application/json",
        })

        logger.info(f"Billing API client initialized for {self.base_url}")

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _handle_response(self, response: requests.Response) -> Dict[str, Any]:
        """Handle API response with error handling."""
        try:
            body = response.json()
        except (json.JSONDecodeError, ValueError):
            body = None

        status = response.status_code
        if status in (401, 403):
            raise AuthenticationError("Authentication with the billing API failed - check USERNAME and PASSWORD", status)
        if 400 <= status < 500:
            message = _error_message(body) or f"HTTP {status}: {response.text}"
            raise SonarValidationError(message, status)
        if status >= 500:
            raise SonarServerError(f"Server error: {status}", status)

        if not isinstance(body, dict):
            raise SonarError(f"Unexpected response body from {response.url}", status)
        return body

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise SonarConnectionError(f"Request to {url} timed out after {self.timeout}s: {e}")
        except requests.exceptions.RequestException as e:
            raise SonarConnectionError(f"Request to {url} failed: {e}")
        return self._handle_response(response)

    # Directory endpoints
    def get_countries(self) -> Dict[str, Any]:
        """Get the country table, keyed by country code."""
        result = self._request("GET", "/_data/countries")
        countries = result.get("data")
        if not isinstance(countries, dict):
            raise SonarError("Country list response did not contain a mapping")
        return countries

    def get_subdivisions(self, country: str) -> Union[Dict[str, Any], List[Any]]:
        """Get valid subdivisions for a country."""
        result = self._request("GET", f"/_data/subdivisions/{country}")
        return result.get("data") or {}

    def get_counties(self, state: str) -> Union[Dict[str, Any], List[Any]]:
        """Get valid counties for a state. May be empty."""
        result = self._request("GET", f"/_data/counties/{state}")
        return result.get("data") or []

    def validate_address(self, payload: Dict[str, Any]) -> ValidationOutcome:
        """Ask the service to normalize an address.

        Never raises for remote failures; the outcome says whether the address
        was validated, rejected by the service, or the service was unavailable.
        """
        try:
            result = self._request("POST", "/_data/validate_address", payload)
        except SonarValidationError as e:
            return ValidationOutcome.rejected(str(e))
        except SonarError as e:
            return ValidationOutcome.unavailable(str(e))

        data = result.get("data")
        if not isinstance(data, dict):
            return ValidationOutcome.unavailable("Validation response did not contain an address")
        try:
            address = RemoteAddress.model_validate(data)
        except PydanticValidationError as e:
            return ValidationOutcome.unavailable(f"Malformed validation response: {e.error_count()} invalid field(s)")
        return ValidationOutcome.validated(address.to_validated())

    # Account endpoints
    def create_account(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create an account."""
        return self._request("POST", "/accounts", payload)

    def create_tokenized_payment_method(self, account_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Attach a tokenized payment method to an account."""
        return self._request("POST", f"/accounts/{account_id}/tokenized_payment_method", payload)
