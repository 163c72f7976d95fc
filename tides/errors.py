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
Errors raised while getting tide information.

Problems the user can fix (an unknown town, a date that couldn't be
understood) are not errors; the resolvers return them as values and the
dialog asks again.  Everything here ends the turn with the "service is
experiencing a problem" message.
"""


class TideError(Exception):
    """Base class for unrecoverable tide lookup failures."""


class MalformedTideSeries(TideError):
    """The predictions don't contain a high, a low and a second high."""


class TideServiceError(TideError):
    """The NOAA service couldn't provide predictions."""


class TransportError(TideServiceError):
    """The request never got a response (connection, timeout, etc.)."""


class NonSuccessStatus(TideServiceError):
    """The service answered with something other than 200."""

    def __init__(self, status_code: int, url: str = "") -> None:
        super().__init__("Non 200 Response: %s" % status_code)
        self.status_code = status_code
        self.url = url


class RemoteApplicationError(TideServiceError):
    """The service answered 200 but reported an error in the payload."""
