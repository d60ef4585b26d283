"""
Address validation package.

Resolves raw import-row addresses into addresses the billing platform will
accept, using the remote validator first and a manual check cascade against
cached reference data when that fails.
"""

from .models import (
    RawAddress,
    ValidatedAddress,
    AddressSource,
    ValidationStatus,
    ValidationOutcome
)
from .exceptions import (
    AddressError,
    InvalidCountryError,
    InvalidSubdivisionError,
    CountyRequiredError,
    InvalidCountyError,
    MissingFieldError
)
from .reference_data import ReferenceDataCache
from .resolver import AddressResolver

__all__ = [
    'RawAddress',
    'ValidatedAddress',
    'AddressSource',
    'ValidationStatus',
    'ValidationOutcome',
    'AddressError',
    'InvalidCountryError',
    'InvalidSubdivisionError',
    'CountyRequiredError',
    'InvalidCountyError',
    'MissingFieldError',
    'ReferenceDataCache',
    'AddressResolver'
]
