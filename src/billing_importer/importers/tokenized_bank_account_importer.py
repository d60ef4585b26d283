"""Tokenized bank account (echeck) payment method import."""

import logging
from typing import Any, Dict, Sequence

from .base import BaseImporter, field

logger = logging.getLogger(__name__)

ACCOUNT_ID = 0
CUSTOMER_PROFILE_ID = 1
TOKEN = 2
IDENTIFIER = 3
AUTO = 4

FALSE_VALUES = {"", "0", "false", "no", "n"}


def to_bool(value: str) -> bool:
    return value.strip().lower() not in FALSE_VALUES


class TokenizedBankAccountImporter(BaseImporter):
    """Attaches tokenized bank accounts to existing accounts."""

    name = "tokenized_echeck_import"
    description = "tokenized bank account import"
    required_columns = (ACCOUNT_ID, TOKEN, IDENTIFIER, AUTO)

    def build_payload(self, row: Sequence[str]) -> Dict[str, Any]:
        payload = {
            'token': field(row, TOKEN),
            'type': 'echeck',
            'identifier': field(row, IDENTIFIER),
            'auto': to_bool(field(row, AUTO)),
        }
        if field(row, CUSTOMER_PROFILE_ID):
            payload['payment_processor_customer_profile_id'] = field(row, CUSTOMER_PROFILE_ID)
        return payload

    def process_row(self, row: Sequence[str]):
        account_id = int(field(row, ACCOUNT_ID))
        self.client.create_tokenized_payment_method(account_id, self.build_payload(row))
        return account_id
