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
NOAA tide prediction retrieval.

Uses the NOAA CO-OPS API, documented: http://tidesandcurrents.noaa.gov/api/
Results can be verified at:
http://tidesandcurrents.noaa.gov/noaatidepredictions/NOAATidesFacade.jsp?Stationid=[id]
"""

import logging
from typing import Dict, List
from urllib.parse import parse_qsl

import httpx

from tides.errors import (NonSuccessStatus, RemoteApplicationError,
                          TransportError)
from tides.extractor import TidePrediction, parse_predictions
from utils.config import Config
from utils.notify import notify

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class TideFetcher(object):
    """
    Retrieves tide predictions for a station and day.

    Makes exactly one request per call.  There is no retry; every failure
    is raised as one of the TideServiceError subclasses.
    """

    def __init__(self, session: httpx.Client, endpoint: str = None,
                 datum: str = None, units: str = None, time_zone: str = None,
                 application: str = None) -> None:
        """
        Args:
            session: HTTP client used for the request
            endpoint: NOAA data getter URL
            datum: Vertical datum, e.g. MLLW
            units: english or metric
            time_zone: NOAA time zone convention, e.g. lst_ldt
            application: Application name reported to NOAA
        """
        self.session = session
        self.endpoint = endpoint or Config.NOAA_API_URL
        self.datum = datum or Config.TIDE_DATUM
        self.units = units or Config.TIDE_UNITS
        self.time_zone = time_zone or Config.TIDE_TIME_ZONE
        self.application = application or Config.NOAA_APPLICATION

    def build_params(self, station_id: int, date_query: str) -> Dict[str, str]:
        """
        Build the query parameters for a request.

        Args:
            station_id: NOAA station id
            date_query: "date=today" or "begin_date=YYYYMMDD&range=24"

        Returns:
            Dict of query parameters
        """
        params = dict(parse_qsl(date_query))
        params.update({"station": str(station_id),
                       "product": "predictions",
                       "datum": self.datum,
                       "application": self.application,
                       "units": self.units,
                       "time_zone": self.time_zone,
                       "format": "json"})
        return params

    def fetch(self, station_id: int, date_query: str) -> List[TidePrediction]:
        """
        Retrieve the predictions for the given station and date.

        Args:
            station_id: NOAA station id
            date_query: Date selection from the DateResolver

        Returns:
            List of TidePrediction in the order NOAA returned them

        Raises:
            TransportError: If no response was received
            NonSuccessStatus: If the response status isn't 200
            RemoteApplicationError: If NOAA reported an error or sent no data
            MalformedTideSeries: If a prediction couldn't be parsed
        """
        params = self.build_params(station_id, date_query)
        event = {"station": station_id, "date_query": date_query, "params": params}

        try:
            r = self.session.get(self.endpoint, params=params,
                                 headers={"Accept": "application/json"})
        except httpx.HTTPError as e:
            logger.error("Communications error: %s", e)
            notify(event, "Communications error", str(e))
            raise TransportError(str(e)) from e

        logger.info("FinalQuery: %s", r.url)
        logger.info("Status Code: %s", r.status_code)

        if r.status_code != 200:
            notify(event,
                   "HTTPSTATUS: %s" % r.status_code,
                   "URL: %s\n\n%s" % (r.url, r.text))
            raise NonSuccessStatus(r.status_code, str(r.url))

        try:
            data = r.json()
        except ValueError as e:
            notify(event, "Invalid response", "URL: %s\n\n%s" % (r.url, r.text))
            raise RemoteApplicationError("Invalid JSON response: %s" % e) from e

        if not isinstance(data, dict):
            raise RemoteApplicationError("Unexpected response: %r" % data)

        if "error" in data:
            error = data["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            logger.error("NOAA error: %s", message)
            notify(event, "NOAA error", message)
            raise RemoteApplicationError(message or "Unknown NOAA error")

        predictions = data.get("predictions")
        if not isinstance(predictions, list):
            notify(event, "No predictions", "URL: %s" % r.url)
            raise RemoteApplicationError("No predictions in response")

        return parse_predictions(predictions)
