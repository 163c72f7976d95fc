#!/usr/bin/python3

# =============================================================================
#
# Copyright 2017 by Leland Lucius
#
# Released under the GNU Affero GPL
# See: https://github.com/lllucius/climacast/blob/master/LICENSE
#
# =============================================================================

import logging

import httpx

from tides.dialog import TideDialog
from tides.fetcher import TideFetcher
from tides.resolvers import CityResolver, DateResolver
from tides.stations import StationDirectory
from utils.config import Config
from utils.constants import STATIONS

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

# =============================================================================
# Factory Functions for Singleton Instances
# =============================================================================

_https_client = None


def get_https_client() -> httpx.Client:
    """
    Get or create the global HTTPS client instance.

    Returns:
        httpx.Client: Configured HTTP client for API calls
    """
    global _https_client
    if _https_client is None:
        _https_client = httpx.Client(timeout=Config.HTTP_TIMEOUT, follow_redirects=True)
    return _https_client


_station_directory_instance = None


def get_station_directory() -> StationDirectory:
    """
    Get or create the global station directory.

    The table comes from Config.STATIONS_FILE when set, otherwise the
    built-in Cape Cod stations are used.

    Returns:
        StationDirectory: Known cities and their NOAA stations
    """
    global _station_directory_instance
    if _station_directory_instance is None:
        if Config.STATIONS_FILE:
            _station_directory_instance = StationDirectory.from_file(Config.STATIONS_FILE)
        else:
            _station_directory_instance = StationDirectory(STATIONS)
    return _station_directory_instance


_tide_fetcher_instance = None


def get_tide_fetcher() -> TideFetcher:
    """
    Get or create the global tide fetcher instance.

    Returns:
        TideFetcher: NOAA prediction client
    """
    global _tide_fetcher_instance
    if _tide_fetcher_instance is None:
        _tide_fetcher_instance = TideFetcher(session=get_https_client())
    return _tide_fetcher_instance


_tide_dialog_instance = None


def get_tide_dialog() -> TideDialog:
    """
    Get or create the global dialog instance.

    Returns:
        TideDialog: Dialog wired to the global directory and fetcher
    """
    global _tide_dialog_instance
    if _tide_dialog_instance is None:
        Config.validate()
        directory = get_station_directory()
        _tide_dialog_instance = TideDialog(
            directory,
            city_resolver=CityResolver(directory, Config.DEFAULT_CITY),
            date_resolver=DateResolver(),
            fetcher=get_tide_fetcher(),
        )
    return _tide_dialog_instance
