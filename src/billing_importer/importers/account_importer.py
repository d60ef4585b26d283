"""
Account import.

Each row becomes one account payload: the account's own fields, its resolved
service address, and optional groups, contact details and phone numbers.
"""

import logging
from typing import Any, Dict, Optional, Sequence

from ..address.models import RawAddress
from ..address.resolver import AddressResolver
from ..config import ImportConfig
from ..integrations.sonar.client import SonarClient
from .base import BaseImporter, field, split_list

logger = logging.getLogger(__name__)

# Column positions in the account import file
ID = 0
NAME = 1
ACCOUNT_TYPE_ID = 2
ACCOUNT_STATUS_ID = 3
ACCOUNT_GROUPS = 4
SUB_ACCOUNTS = 5
NEXT_BILL_DATE = 6
LINE1 = 7
LINE2 = 8
CITY = 9
STATE = 10
COUNTY = 11
ZIP = 12
COUNTRY = 13
LATITUDE = 14
LONGITUDE = 15
CONTACT_NAME = 16
ROLE = 17
EMAIL_ADDRESS = 18
EMAIL_MESSAGE_CATEGORIES = 19
WORK_PHONE = 20
WORK_PHONE_EXTENSION = 21
HOME_PHONE = 22
MOBILE_PHONE = 23
FAX = 24


def address_from_row(row: Sequence[str]) -> RawAddress:
    return RawAddress(
        line1=field(row, LINE1),
        line2=field(row, LINE2),
        city=field(row, CITY),
        state=field(row, STATE),
        county=field(row, COUNTY),
        zip=field(row, ZIP),
        country=field(row, COUNTRY),
        latitude=field(row, LATITUDE),
        longitude=field(row, LONGITUDE),
    )


class AccountPayloadBuilder:
    """Builds account API payloads from import rows."""

    def __init__(self, resolver: AddressResolver, validate: bool = True, requires_county: bool = True):
        self.resolver = resolver
        self.validate = validate
        self.requires_county = requires_county

    def build(self, row: Sequence[str]) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            'id': int(field(row, ID)),
            'name': field(row, NAME),
            'account_type_id': int(field(row, ACCOUNT_TYPE_ID)),
            'account_status_id': int(field(row, ACCOUNT_STATUS_ID)),
            'contact_name': field(row, CONTACT_NAME),
        }

        address = self.resolver.resolve(address_from_row(row), self.validate, self.requires_county)
        payload.update(address.to_payload())

        # The API rejects anything else that is invalid, so optional fields are passed through
        if field(row, ACCOUNT_GROUPS):
            payload['account_groups'] = split_list(field(row, ACCOUNT_GROUPS))
        if field(row, SUB_ACCOUNTS):
            payload['sub_accounts'] = split_list(field(row, SUB_ACCOUNTS))
        if field(row, NEXT_BILL_DATE):
            payload['next_bill_date'] = field(row, NEXT_BILL_DATE)
        if field(row, ROLE):
            payload['role'] = field(row, ROLE)
        if field(row, EMAIL_ADDRESS):
            payload['email_address'] = field(row, EMAIL_ADDRESS)
        payload['email_message_categories'] = split_list(field(row, EMAIL_MESSAGE_CATEGORIES))

        phone_numbers = self._phone_numbers(row)
        if phone_numbers:
            payload['phone_numbers'] = phone_numbers

        return payload

    @staticmethod
    def _phone_numbers(row: Sequence[str]) -> Dict[str, Dict[str, Optional[str]]]:
        phone_numbers = {}
        if field(row, WORK_PHONE):
            phone_numbers['work'] = {
                'number': field(row, WORK_PHONE),
                'extension': field(row, WORK_PHONE_EXTENSION) or None,
            }
        for kind, column in (('home', HOME_PHONE), ('mobile', MOBILE_PHONE), ('fax', FAX)):
            if field(row, column):
                phone_numbers[kind] = {
                    'number': field(row, column),
                    'extension': None,
                }
        return phone_numbers


class AccountImporter(BaseImporter):
    """Imports accounts, one API call per row."""

    name = "account_import"
    description = "account import"
    required_columns = (ID, NAME, ACCOUNT_TYPE_ID, ACCOUNT_STATUS_ID, LINE1, CITY, STATE, COUNTRY, CONTACT_NAME)

    def __init__(self, client: Optional[SonarClient] = None, config: Optional[ImportConfig] = None,
                 resolver: Optional[AddressResolver] = None, validate: Optional[bool] = None,
                 requires_county: Optional[bool] = None):
        super().__init__(client, config)
        # Loads the country table; fails the run when it is unavailable
        self.resolver = resolver or AddressResolver(self.client, county_country=self.config.county_country)
        self.payload_builder = AccountPayloadBuilder(
            self.resolver,
            validate=self.config.validate_addresses if validate is None else validate,
            requires_county=self.config.requires_county if requires_county is None else requires_county,
        )

    def process_row(self, row: Sequence[str]):
        payload = self.payload_builder.build(row)
        self.client.create_account(payload)
        return payload['id']
