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
Slot resolution for Cape Cod Tides.

Turns the raw City and Date slot values into a station reference and a
request date.  Neither resolver raises for bad input: an unknown city comes
back as an error result and an unusable date comes back as None so the
dialog can ask again.
"""

import logging
from datetime import date, datetime, time
from typing import Any, Callable, Dict, Optional

from dateutil import parser, tz
from dateutil.relativedelta import SA, relativedelta

from tides.stations import StationDirectory
from utils import converters
from utils.config import Config
from utils.constants import (DATE_PRESENT_REF, DATE_WEEKEND_SUFFIX,
                             RANGE_HOURS, TODAY_DISPLAY_TEXT,
                             TODAY_QUERY_PARAM)

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class ResolvedCity(object):
    """
    Result of resolving the City slot.

    Either a city with its station id, or an error.  An error keeps the
    text the user said, if any, so it can be repeated back to them.
    """

    def __init__(self, city: Optional[str], station_id: Optional[int] = None,
                 error: bool = False) -> None:
        self.city = city
        self.station_id = station_id
        self.error = error

    @classmethod
    def failed(cls, raw_city: Optional[str] = None) -> "ResolvedCity":
        return cls(raw_city, None, error=True)

    @property
    def raw_city(self) -> Optional[str]:
        return self.city if self.error else None

    def to_dict(self) -> Dict[str, Any]:
        return {"city": self.city, "station": self.station_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResolvedCity":
        station = data["station"]
        if isinstance(station, bool) or not isinstance(station, int) or station <= 0:
            raise ValueError("Invalid station id: %r" % station)
        return cls(str(data["city"]), station)

    def __eq__(self, other):
        if not isinstance(other, ResolvedCity):
            return NotImplemented
        return (self.city, self.station_id, self.error) == \
               (other.city, other.station_id, other.error)

    def __repr__(self):
        if self.error:
            return "ResolvedCity(error=True, raw_city=%r)" % self.city
        return "ResolvedCity(city=%r, station_id=%r)" % (self.city, self.station_id)


class ResolvedDate(object):
    """
    Result of resolving the Date slot.

    display_text is what gets spoken ("Today", "Saturday June 20th") and
    query_param is the NOAA date selection ("date=today" or
    "begin_date=20170620&range=24").
    """

    def __init__(self, display_text: str, query_param: str,
                 when: Optional[date] = None) -> None:
        self.display_text = display_text
        self.query_param = query_param
        self.when = when

    def to_dict(self) -> Dict[str, Any]:
        return {"display_text": self.display_text,
                "query_param": self.query_param}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResolvedDate":
        return cls(str(data["display_text"]), str(data["query_param"]))

    def __eq__(self, other):
        if not isinstance(other, ResolvedDate):
            return NotImplemented
        return (self.display_text, self.query_param) == \
               (other.display_text, other.query_param)

    def __repr__(self):
        return "ResolvedDate(display_text=%r, query_param=%r)" % \
               (self.display_text, self.query_param)


class CityResolver(object):
    """Resolves the City slot against the station directory."""

    def __init__(self, directory: StationDirectory, default_city: str = None) -> None:
        """
        Args:
            directory: Known cities and their stations
            default_city: City used when one-shot requests don't name one

        Raises:
            ValueError: If the default city isn't in the directory
        """
        self.directory = directory
        self.default_city = default_city or Config.DEFAULT_CITY
        if self.default_city not in directory:
            raise ValueError("Default city %s is not a known station" % self.default_city)

    def resolve(self, city: Optional[str], allow_default: bool = False) -> ResolvedCity:
        """
        Gets the city station, or returns an error.

        Args:
            city: Raw City slot value, may be None or empty
            allow_default: Use the default city when no value was given

        Returns:
            ResolvedCity, with error set if the city is missing or unknown
        """
        # slots can be missing, or slots can be provided but with empty value.
        # must test for both.
        if city is None or not city.strip():
            if not allow_default:
                return ResolvedCity.failed()
            return ResolvedCity(self.default_city, self.directory.lookup(self.default_city))

        city = city.strip()
        station = self.directory.lookup(city)
        if station is None:
            logger.info("No station for city: %s", city)
            return ResolvedCity.failed(city)

        return ResolvedCity(city, station)


def local_today() -> date:
    """Returns today's date in the skill's local time zone."""
    return datetime.now(tz=tz.gettz(Config.LOCAL_TIMEZONE)).date()


class DateResolver(object):
    """
    Resolves the Date slot into a display string and NOAA query parameter.

    Alexa sends AMAZON.DATE values in ISO 8601 form ("2017-06-20",
    "2017-W25", "2017-W25-WE", "PRESENT_REF").  Free text like "Saturday"
    is also accepted and is taken relative to today.
    """

    def __init__(self, today: Callable[[], date] = None) -> None:
        """
        Args:
            today: Returns the current date; defaults to local_today
        """
        self.today = today or local_today

    def resolve(self, value: Optional[str]) -> Optional[ResolvedDate]:
        """
        Gets the date, defaulting to today if none provided.

        Args:
            value: Raw Date slot value, may be None or empty

        Returns:
            ResolvedDate, or None if a value was given but isn't a date
        """
        if value is None or not value.strip():
            return ResolvedDate(TODAY_DISPLAY_TEXT, TODAY_QUERY_PARAM)

        when = self.parse(value.strip())
        if when is None:
            logger.info("Unable to understand date: %s", value)
            return None

        # format the request day like YYYYMMDD
        query = "begin_date=%04d%02d%02d&range=%d" % \
                (when.year, when.month, when.day, RANGE_HOURS)

        return ResolvedDate(converters.to_date(when), query, when)

    def parse(self, value: str) -> Optional[date]:
        """
        Convert a slot value to a calendar date.

        Returns:
            The date, or None if the value can't be understood
        """
        today = self.today()

        if value.upper() == DATE_PRESENT_REF:
            return today

        weekend = value.upper().endswith(DATE_WEEKEND_SUFFIX)
        if weekend:
            value = value[:-len(DATE_WEEKEND_SUFFIX)]

        try:
            when = parser.isoparse(value).date()
        except (ValueError, OverflowError):
            # Weekends only come as ISO weeks
            if weekend:
                return None
            try:
                when = parser.parse(value, default=datetime.combine(today, time())).date()
            except (ValueError, OverflowError):
                return None

        # Use the Saturday of the requested weekend
        if weekend:
            when += relativedelta(weekday=SA)

        return when
