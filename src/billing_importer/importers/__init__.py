"""CSV importers for accounts and payment methods."""

from .base import BaseImporter, ImportResult, ImportFileError
from .account_importer import AccountImporter, AccountPayloadBuilder
from .tokenized_bank_account_importer import TokenizedBankAccountImporter

__all__ = [
    'BaseImporter',
    'ImportResult',
    'ImportFileError',
    'AccountImporter',
    'AccountPayloadBuilder',
    'TokenizedBankAccountImporter'
]
