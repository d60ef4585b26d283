"""
Address resolution for import rows.

The resolver first asks the platform's validation service to normalize an
address. When the service is unavailable or rejects the address, the original
input is checked piece by piece against cached reference data instead:
subdivision, county (for the county-requiring country), then required fields.
"""

import logging
from typing import Union, TYPE_CHECKING

from .exceptions import (
    InvalidCountryError,
    InvalidSubdivisionError,
    CountyRequiredError,
    InvalidCountyError,
    MissingFieldError,
)
from .models import RawAddress, ValidatedAddress, ValidationStatus, is_blank
from .reference_data import ReferenceDataCache, normalize_key

if TYPE_CHECKING:
    from ..integrations.sonar.client import SonarClient

logger = logging.getLogger(__name__)

# Checked in this order; the first blank one is reported
REQUIRED_FIELDS = ("city", "state", "country", "zip", "latitude", "longitude")


class AddressResolver:
    """Turns raw addresses into addresses the billing platform accepts."""

    def __init__(self, client: "SonarClient", reference_data: ReferenceDataCache = None,
                 county_country: str = "US"):
        self.client = client
        self.reference_data = reference_data or ReferenceDataCache(client)
        self.county_country = county_country

    def resolve(self, raw: Union[RawAddress, dict], validate: bool = True,
                requires_county: bool = True) -> ValidatedAddress:
        """Return a validated address or raise an ``AddressError``.

        Args:
            raw: Address from the import row
            validate: Try the remote validator first. Pass False when the
                address must not be modified.
            requires_county: Enforce county checks for the county-requiring country

        Returns:
            The normalized address from the validator, or the unchanged input
            when it passed the manual checks
        """
        if isinstance(raw, dict):
            raw = RawAddress.from_dict(raw)

        if not self.reference_data.has_country(raw.country):
            raise InvalidCountryError(raw.country)

        if validate:
            outcome = self.client.validate_address(raw.validation_request())

            if outcome.status is ValidationStatus.VALIDATED:
                address = outcome.address
                # Caller-supplied coordinates win over the service's estimate
                if not is_blank(raw.latitude):
                    address.latitude = raw.latitude
                if not is_blank(raw.longitude):
                    address.longitude = raw.longitude
                return address

            if outcome.status is ValidationStatus.REJECTED:
                logger.warning(f"Address validation rejected, checking manually: {outcome.message}")
            else:
                logger.warning(f"Address validation unavailable, checking manually: {outcome.message}")

        return self.check_unvalidated(raw, requires_county)

    def check_unvalidated(self, raw: RawAddress, requires_county: bool = True) -> ValidatedAddress:
        """Run the manual check cascade and return ``raw`` unchanged if it passes."""
        if normalize_key(raw.state) not in self.reference_data.subdivisions(raw.country):
            raise InvalidSubdivisionError(raw.state, raw.country)

        if raw.country == self.county_country and requires_county:
            self._check_county(raw)

        for field in REQUIRED_FIELDS:
            if is_blank(getattr(raw, field)):
                raise MissingFieldError(field)

        return ValidatedAddress.from_raw(raw)

    def _check_county(self, raw: RawAddress):
        counties = self.reference_data.counties(raw.state)
        if not counties:
            logger.debug(f"No counties enumerated for {raw.state}, skipping county check")
            return

        if is_blank(raw.county):
            raise CountyRequiredError(raw.country)

        if normalize_key(raw.county) not in {normalize_key(name) for name in counties}:
            raise InvalidCountyError(raw.county, raw.state)
