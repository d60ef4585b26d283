"""
Billing platform integration package.

Provides the HTTP client for the directory endpoints (countries, address
validation, subdivisions, counties) and the account endpoints.
"""

from .client import (
    SonarClient,
    SonarError,
    AuthenticationError,
    SonarValidationError,
    SonarServerError,
    SonarConnectionError
)

__all__ = [
    'SonarClient',
    'SonarError',
    'AuthenticationError',
    'SonarValidationError',
    'SonarServerError',
    'SonarConnectionError'
]
