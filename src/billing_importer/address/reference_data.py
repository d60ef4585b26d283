"""
Run-scoped cache of the platform's address reference data.

The country table is loaded once when the cache is built. Subdivisions (keyed
by country) and counties (keyed by state) are fetched the first time a key is
needed and kept for the rest of the run.
"""

import logging
from typing import Any, Dict, Iterable, Set, TYPE_CHECKING

if TYPE_CHECKING:
    from ..integrations.sonar.client import SonarClient

logger = logging.getLogger(__name__)


def _entries(data: Any) -> Iterable[Any]:
    # Code -> name mappings contribute both the codes and the names
    if isinstance(data, dict):
        yield from data.keys()
        yield from data.values()
    elif data:
        yield from data


def normalize_key(value: Any) -> str:
    return str(value if value is not None else "").strip().lower()


class ReferenceDataCache:
    """Memoizes country, subdivision and county lookups for one import run."""

    def __init__(self, client: "SonarClient"):
        self.client = client
        self._countries: Dict[str, Any] = dict(client.get_countries())
        self._subdivisions: Dict[str, Set[str]] = {}
        self._counties: Dict[str, Set[str]] = {}
        logger.info(f"Loaded {len(self._countries)} countries")

    def countries(self) -> Dict[str, Any]:
        return dict(self._countries)

    def has_country(self, code: str) -> bool:
        return code in self._countries

    def subdivisions(self, country: str) -> Set[str]:
        """Lowercased subdivision codes and names for ``country``."""
        if country not in self._subdivisions:
            logger.debug(f"Fetching subdivisions for {country}")
            data = self.client.get_subdivisions(country)
            self._subdivisions[country] = {normalize_key(entry) for entry in _entries(data)} - {""}
        return self._subdivisions[country]

    def counties(self, state: str) -> Set[str]:
        """County names for ``state``; empty when the state has none enumerated."""
        if state not in self._counties:
            logger.debug(f"Fetching counties for {state}")
            data = self.client.get_counties(state)
            if isinstance(data, dict):
                data = data.values()
            self._counties[state] = {str(name).strip() for name in data if str(name).strip()}
        return self._counties[state]
