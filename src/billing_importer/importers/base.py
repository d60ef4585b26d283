"""
Shared CSV import loop.

Every importer pre-scans the whole file for required columns, then submits one
API request per row. A failing row is written to the run's failure log and the
run carries on with the next row.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from ..address.exceptions import AddressError
from ..config import ImportConfig, get_import_config
from ..integrations.sonar.client import SonarClient, SonarError
from .run_log import RunLog

logger = logging.getLogger(__name__)


class ImportFileError(ValueError):
    """The import file cannot be used; no rows were processed."""
    pass


@dataclass
class ImportResult:
    """Summary of an import run."""
    successes: int = 0
    failures: int = 0
    failure_log_name: Optional[Path] = None
    success_log_name: Optional[Path] = None


def field(row: Sequence[str], index: int) -> str:
    """Trimmed column value, empty when the row is too short."""
    if index < len(row) and row[index] is not None:
        return row[index].strip()
    return ""


def split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class BaseImporter:
    """Template for row-by-row imports. Subclasses define columns and submission."""

    name = "import"
    description = "import"
    required_columns: Tuple[int, ...] = ()

    def __init__(self, client: Optional[SonarClient] = None, config: Optional[ImportConfig] = None):
        self.client = client or SonarClient()
        self.config = config or get_import_config()

    def read_rows(self, path: Union[str, Path]) -> Iterator[List[str]]:
        try:
            with open(path, newline="", encoding="utf-8-sig") as handle:
                yield from csv.reader(handle, delimiter=self.config.delimiter)
        except OSError as e:
            raise ImportFileError(f"File could not be opened: {e}")
        except (UnicodeDecodeError, csv.Error) as e:
            raise ImportFileError(f"File could not be read: {e}")

    def validate_import_file(self, path: Union[str, Path]):
        """Reject the file if any row leaves a required column empty."""
        for row_number, row in enumerate(self.read_rows(path), start=1):
            for column in self.required_columns:
                if field(row, column) == "":
                    raise ImportFileError(
                        f"In the {self.description}, column number {column + 1} is required, "
                        f"and it is empty on row {row_number}."
                    )

    def import_file(self, path: Union[str, Path]) -> ImportResult:
        """Import every row of ``path`` and return the run summary."""
        path = Path(path)
        if not path.is_file():
            raise ImportFileError(f"File could not be opened: {path}")

        self.validate_import_file(path)
        logger.info(f"Starting {self.description} from {path}")

        result = ImportResult()
        with RunLog(self.config.log_directory, self.name) as run_log:
            result.failure_log_name = run_log.failure_log_name
            result.success_log_name = run_log.success_log_name

            for row_number, row in enumerate(self.read_rows(path), start=1):
                try:
                    account_id = self.process_row(row)
                except (SonarError, AddressError, ValueError) as e:
                    run_log.failure(row_number, str(e))
                    result.failures += 1
                    continue

                run_log.success(row_number, account_id)
                result.successes += 1

        logger.info(
            f"Finished {self.description}: {result.successes} succeeded, "
            f"{result.failures} failed (failures logged to {result.failure_log_name})"
        )
        return result

    def process_row(self, row: Sequence[str]):
        """Submit one row and return the account ID it was recorded against."""
        raise NotImplementedError
