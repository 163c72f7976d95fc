#!/usr/bin/python3

# =============================================================================
#
# Copyright 2017 by Leland Lucius
#
# Released under the GNU Affero GPL
# See: https://github.com/lllucius/climacast/blob/master/LICENSE
#
# =============================================================================

"""
Station directory for Cape Cod Tides.

Maps the towns the skill knows about to NOAA tide station identifiers.
"""

import json
import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class StationDirectory(object):
    """
    Read-only mapping from city name to NOAA station id.

    Lookups ignore case but are otherwise exact, there is no fuzzy
    matching.  The order of the table is kept so the list of supported
    towns is always spoken the same way.
    """

    def __init__(self, stations: Mapping[str, int]) -> None:
        """
        Initialize the directory.

        Args:
            stations: Mapping of city name to station id

        Raises:
            ValueError: If a station id isn't a positive integer or two
                        city names only differ by case
        """
        table: Dict[str, int] = {}
        names: List[str] = []
        for city, station in stations.items():
            if isinstance(station, bool) or not isinstance(station, int) or station <= 0:
                raise ValueError("Invalid station id for %s: %r" % (city, station))

            key = city.strip().casefold()
            if key in table:
                raise ValueError("Duplicate city in station table: %s" % city)

            table[key] = station
            names.append(city.strip())

        self._stations = MappingProxyType(table)
        self._names = tuple(names)

    @classmethod
    def from_file(cls, path: str) -> "StationDirectory":
        """
        Load a directory from a JSON object of {"city": station_id}.

        Args:
            path: Path to the JSON file

        Returns:
            StationDirectory built from the file
        """
        with open(path, "r") as f:
            stations = json.load(f)

        if not isinstance(stations, dict):
            raise ValueError("Station file %s must contain a JSON object" % path)

        logger.info("Loaded %d stations from %s", len(stations), path)

        return cls(stations)

    def lookup(self, city_name: Optional[str]) -> Optional[int]:
        """
        Returns the station id for the given city, or None if unknown.
        """
        if not city_name:
            return None
        return self._stations.get(city_name.strip().casefold())

    def list_all(self) -> List[str]:
        """Returns the city names in table order."""
        return list(self._names)

    def __contains__(self, city_name) -> bool:
        return self.lookup(city_name) is not None

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self):
        return iter(self._names)
