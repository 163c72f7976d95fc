"""
Tide modules for Cape Cod Tides.

This package contains the station directory, slot resolvers, the NOAA
prediction fetcher, tide extraction and the dialog that ties them together.
"""

from tides.dialog import ConversationState, SkillResponse, TideDialog
from tides.errors import (MalformedTideSeries, NonSuccessStatus,
                          RemoteApplicationError, TideError, TideServiceError,
                          TransportError)
from tides.extractor import (TideExtractor, TidePrediction, TideReading,
                             TideSummary, find_high_tides, parse_predictions)
from tides.fetcher import TideFetcher
from tides.resolvers import (CityResolver, DateResolver, ResolvedCity,
                             ResolvedDate)
from tides.stations import StationDirectory

__all__ = [
    'StationDirectory',
    'CityResolver', 'DateResolver', 'ResolvedCity', 'ResolvedDate',
    'TideExtractor', 'TidePrediction', 'TideReading', 'TideSummary',
    'find_high_tides', 'parse_predictions',
    'TideFetcher',
    'TideDialog', 'ConversationState', 'SkillResponse',
    'TideError', 'MalformedTideSeries', 'TideServiceError',
    'TransportError', 'NonSuccessStatus', 'RemoteApplicationError',
]
