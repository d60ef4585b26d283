"""Success and failure log files for a single import run."""

import logging
import tempfile
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


class RunLog:
    """One failure file and one success file, each line describing one row."""

    def __init__(self, log_directory: Union[str, Path], name: str):
        self.log_directory = Path(log_directory)
        self.log_directory.mkdir(parents=True, exist_ok=True)

        self.failure_log_name = self._create(f"{name}_failures")
        self.success_log_name = self._create(f"{name}_successes")
        self._failures = open(self.failure_log_name, "w", encoding="utf-8")
        self._successes = open(self.success_log_name, "w", encoding="utf-8")

    def _create(self, prefix: str) -> Path:
        handle = tempfile.NamedTemporaryFile(
            mode="w", prefix=f"{prefix}_", suffix=".log", dir=self.log_directory, delete=False
        )
        handle.close()
        return Path(handle.name)

    def failure(self, row: int, reason: str):
        self._failures.write(f"Row {row} failed: {reason}\n")
        logger.warning(f"Row {row} failed: {reason}")

    def success(self, row: int, account_id):
        self._successes.write(f"Row {row} succeeded for account ID {account_id}\n")
        logger.debug(f"Row {row} succeeded for account ID {account_id}")

    def close(self):
        self._failures.close()
        self._successes.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
