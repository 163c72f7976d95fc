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
Tide extraction for Cape Cod Tides.

NOAA returns water level predictions every six minutes.  This module turns
that series into the day's first high tide, the low tide that follows it,
and the second high tide.
"""

import logging
import math
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from dateutil import parser

from tides.errors import MalformedTideSeries
from utils import converters

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class TidePrediction(object):
    """A single predicted water level."""

    def __init__(self, time: datetime, level: float) -> None:
        self.time = time
        self.level = level

    def __eq__(self, other):
        if not isinstance(other, TidePrediction):
            return NotImplemented
        return (self.time, self.level) == (other.time, other.level)

    def __repr__(self):
        return "TidePrediction(%s, %s)" % (self.time.isoformat(), self.level)


class TideReading(object):
    """A high or low tide, with its time and height ready for speech."""

    def __init__(self, time: datetime, height: float) -> None:
        self.time = time
        self.height = height

    @classmethod
    def from_prediction(cls, prediction: TidePrediction) -> "TideReading":
        return cls(prediction.time, prediction.level)

    @property
    def formatted_time(self) -> str:
        return converters.to_time(self.time)

    @property
    def formatted_height(self) -> str:
        return converters.to_height(self.height)

    def __eq__(self, other):
        if not isinstance(other, TideReading):
            return NotImplemented
        return (self.time, self.height) == (other.time, other.height)

    def __repr__(self):
        return "TideReading(%s, %s)" % (self.time.isoformat(), self.height)


class TideSummary(object):
    """The two high tides of the day and the low tide between them."""

    def __init__(self, first_high: TideReading, low: TideReading,
                 second_high: TideReading) -> None:
        self.first_high = first_high
        self.low = low
        self.second_high = second_high

    def __repr__(self):
        return "TideSummary(first_high=%r, low=%r, second_high=%r)" % \
               (self.first_high, self.low, self.second_high)


def parse_predictions(raw: Iterable[Dict[str, Any]]) -> List[TidePrediction]:
    """
    Convert NOAA prediction entries into TidePredictions.

    Args:
        raw: Entries like {"t": "2017-09-23 00:00", "v": "3.456"}

    Returns:
        List of TidePrediction in the order given

    Raises:
        MalformedTideSeries: If an entry is missing a value, can't be parsed
            or has a level that isn't finite
    """
    predictions = []
    for entry in raw:
        try:
            when = parser.parse(entry["t"])
            level = float(entry["v"])
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise MalformedTideSeries("Bad prediction %r: %s" % (entry, e))
        if not math.isfinite(level):
            raise MalformedTideSeries("Bad prediction %r: level is not a number" % (entry,))
        predictions.append(TidePrediction(when, level))

    return predictions


def is_tide_increasing(last: TidePrediction, current: TidePrediction) -> bool:
    return last.level < current.level


def find_high_tides(predictions: List[TidePrediction]) -> TideSummary:
    """
    Algorithm to find the 2 high tides for the day and the low between them.

    Each candidate is held at the last sample before the direction changes,
    so a high tide is the peak just before the water starts to fall and the
    low is the bottom just before it starts to rise again.  Level changes of
    zero count as falling.

    Args:
        predictions: Time ordered water levels

    Returns:
        TideSummary

    Raises:
        MalformedTideSeries: If the series doesn't rise, fall, rise and fall
                             again
    """
    last_prediction: Optional[TidePrediction] = None
    first_high_tide: Optional[TidePrediction] = None
    second_high_tide: Optional[TidePrediction] = None
    low_tide: Optional[TidePrediction] = None
    first_tide_done = False
    complete = False

    for prediction in predictions:
        if last_prediction is None:
            last_prediction = prediction
            continue

        if is_tide_increasing(last_prediction, prediction):
            if not first_tide_done:
                first_high_tide = prediction
            else:
                second_high_tide = prediction
        else:
            # we're decreasing
            if not first_tide_done and first_high_tide is not None:
                first_tide_done = True
            elif second_high_tide is not None:
                # we're decreasing after having found the 2nd tide. We're done.
                complete = True
                break

            if first_tide_done:
                low_tide = prediction

        last_prediction = prediction

    if not complete:
        raise MalformedTideSeries(
            "Expected a high, low and high tide in %d predictions" % len(predictions))

    return TideSummary(TideReading.from_prediction(first_high_tide),
                       TideReading.from_prediction(low_tide),
                       TideReading.from_prediction(second_high_tide))


class TideExtractor(object):
    """Finds the day's tides in a series of predictions."""

    def extract(self, predictions: List[TidePrediction]) -> TideSummary:
        summary = find_high_tides(predictions)
        logger.info("Tides: %r", summary)
        return summary
