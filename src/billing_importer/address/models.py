"""
Address data models.

``RawAddress`` holds caller-supplied fields exactly as read from an import row
(trimmed, nothing else). ``ValidatedAddress`` is what the resolver hands back,
either normalized by the remote validator or the unchanged input after the
manual checks. ``RemoteAddress`` parses the validator's response body.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

Coordinate = Union[str, float, None]


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def is_blank(value: Any) -> bool:
    """True for None and for values that are empty once trimmed."""
    return _clean(value) == ""


@dataclass
class RawAddress:
    """Address as supplied by an import row."""
    line1: str = ""
    line2: str = ""
    city: str = ""
    state: str = ""
    county: str = ""
    zip: str = ""
    country: str = ""
    latitude: str = ""
    longitude: str = ""

    def __post_init__(self):
        for name in self.__dataclass_fields__:
            setattr(self, name, _clean(getattr(self, name)))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawAddress":
        return cls(**{name: data.get(name) for name in cls.__dataclass_fields__})

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    def validation_request(self) -> Dict[str, str]:
        """Body for the remote validator: county stripped, coordinates only when given."""
        body = {
            "line1": self.line1,
            "line2": self.line2,
            "city": self.city,
            "state": self.state,
            "zip": self.zip,
            "country": self.country,
        }
        if self.latitude:
            body["latitude"] = self.latitude
        if self.longitude:
            body["longitude"] = self.longitude
        return body


class AddressSource(Enum):
    """Which path produced a validated address."""
    REMOTE = "remote"
    MANUAL = "manual"


@dataclass
class ValidatedAddress:
    """Address accepted for submission.

    ``county`` is ``None`` when the remote validator produced the address, since
    the validator neither receives nor returns it.
    """
    line1: str
    line2: str
    city: str
    state: str
    zip: str
    country: str
    latitude: Coordinate = None
    longitude: Coordinate = None
    county: Optional[str] = None
    source: AddressSource = AddressSource.MANUAL

    @classmethod
    def from_raw(cls, raw: RawAddress) -> "ValidatedAddress":
        return cls(
            line1=raw.line1,
            line2=raw.line2,
            city=raw.city,
            state=raw.state,
            zip=raw.zip,
            country=raw.country,
            latitude=raw.latitude,
            longitude=raw.longitude,
            county=raw.county,
            source=AddressSource.MANUAL,
        )

    def to_payload(self) -> Dict[str, Any]:
        """Address fields for an account payload."""
        payload = {
            "line1": self.line1,
            "line2": self.line2,
            "city": self.city,
            "state": self.state,
            "zip": self.zip,
            "country": self.country,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
        if self.county is not None:
            payload["county"] = self.county
        return payload


class RemoteAddress(BaseModel):
    """Normalized address returned by the validation service."""
    model_config = ConfigDict(extra="ignore")

    line1: str
    line2: Optional[str] = ""
    city: str
    state: str
    zip: str
    country: str
    latitude: Coordinate = None
    longitude: Coordinate = None

    @field_validator("line1", "line2", "city", "state", "zip", "country", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _clean(value)

    def to_validated(self) -> ValidatedAddress:
        return ValidatedAddress(
            line1=self.line1,
            line2=self.line2 or "",
            city=self.city,
            state=self.state,
            zip=self.zip,
            country=self.country,
            latitude=self.latitude,
            longitude=self.longitude,
            county=None,
            source=AddressSource.REMOTE,
        )


class ValidationStatus(Enum):
    """Result of a remote validation attempt."""
    VALIDATED = "validated"
    UNAVAILABLE = "unavailable"
    REJECTED = "rejected"


@dataclass
class ValidationOutcome:
    """Remote validation result; only ``VALIDATED`` carries an address."""
    status: ValidationStatus
    address: Optional[ValidatedAddress] = None
    message: Optional[str] = None

    @classmethod
    def validated(cls, address: ValidatedAddress) -> "ValidationOutcome":
        return cls(ValidationStatus.VALIDATED, address=address)

    @classmethod
    def unavailable(cls, message: str) -> "ValidationOutcome":
        return cls(ValidationStatus.UNAVAILABLE, message=message)

    @classmethod
    def rejected(cls, message: str) -> "ValidationOutcome":
        return cls(ValidationStatus.REJECTED, message=message)

    @property
    def is_validated(self) -> bool:
        return self.status is ValidationStatus.VALIDATED
