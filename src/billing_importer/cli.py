#!/usr/bin/env python3
"""Command line entry point for account and payment method imports.

Usage:
  billing-importer accounts accounts.csv
  billing-importer accounts accounts.csv --no-validate --no-county
  billing-importer bank-accounts echecks.csv
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import ConfigManager, ConfigurationError
from .importers import AccountImporter, ImportFileError, TokenizedBankAccountImporter
from .integrations.sonar.client import SonarClient, SonarError

logger = logging.getLogger(__name__)


def configure_logging(level: str, log_directory: str):
    log_dir = Path(log_directory)
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_dir / 'billing_importer.log'),
            logging.StreamHandler(sys.stdout)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Import accounts and payment methods into the billing platform')
    parser.add_argument('--config', default='config.json', help='Path to an optional JSON config file')
    parser.add_argument('--log-level', default=None, help='Override LOG_LEVEL')

    subparsers = parser.add_subparsers(dest='command', required=True)

    accounts = subparsers.add_parser('accounts', help='Import accounts')
    accounts.add_argument('file', help='CSV file of accounts')
    accounts.add_argument('--no-validate', action='store_true',
                          help='Do not let the address validator modify addresses; check them manually only')
    accounts.add_argument('--no-county', action='store_true', help='Skip county checks on manually checked addresses')

    bank_accounts = subparsers.add_parser('bank-accounts', help='Import tokenized bank accounts')
    bank_accounts.add_argument('file', help='CSV file of tokenized bank accounts')

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        manager = ConfigManager(Path(args.config))
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    config = manager.get_system_config()
    configure_logging(args.log_level or config.log_level, config.imports.log_directory)

    try:
        with SonarClient(config.sonar) as client:
            if args.command == 'accounts':
                importer = AccountImporter(
                    client,
                    config.imports,
                    validate=False if args.no_validate else None,
                    requires_county=False if args.no_county else None,
                )
            else:
                importer = TokenizedBankAccountImporter(client, config.imports)
            result = importer.import_file(args.file)
    except ImportFileError as e:
        logger.error(f"Import aborted: {e}")
        return 1
    except SonarError as e:
        logger.error(f"Billing API unavailable: {e}")
        return 1

    print(f"Successes: {result.successes}")
    print(f"Failures: {result.failures}")
    print(f"Failure log: {result.failure_log_name}")
    print(f"Success log: {result.success_log_name}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
