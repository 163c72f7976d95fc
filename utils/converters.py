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
Speech conversion utilities for Cape Cod Tides.

This module provides utility functions for converting tide heights, times
and dates into text that reads naturally when spoken.
"""

import math
from datetime import date, datetime
from typing import List, Union

from utils.constants import (DAYS, MONTH_DAY_SUFFIXES, MONTH_NAMES,
                             NUMBER_WORDS, TENS_WORDS)


def number_to_words(number: int) -> str:
    """
    Convert a non-negative whole number to words.

    Args:
        number: Whole number to convert

    Returns:
        The number as words, e.g. 42 -> "forty two".  Numbers of 100 or
        more are returned as digits.
    """
    if number < 0:
        raise ValueError("number must not be negative: %d" % number)

    if number < 20:
        return NUMBER_WORDS[number]

    if number < 100:
        tens, ones = divmod(number, 10)
        if ones == 0:
            return TENS_WORDS[tens]
        return "%s %s" % (TENS_WORDS[tens], NUMBER_WORDS[ones])

    return str(number)


def to_height(height: Union[float, str]) -> str:
    """
    Formats the height, rounding to the nearest 1/2 foot.

    Fractions below .25 round down, fractions from .25 up to .75 become a
    half, and anything above rounds up.  Negative readings keep their sign,
    e.g. -4.354 -> "negative four and a half feet".

    Args:
        height: Water level in feet

    Returns:
        Height as spoken text
    """
    height = float(height)
    is_negative = height < 0
    height = abs(height)

    remainder = height % 1
    if remainder < 0.25:
        feet = math.floor(height)
        remainder_text = ""
    elif remainder < 0.75:
        feet = math.floor(height)
        remainder_text = " and a half"
    else:
        feet = math.ceil(height)
        remainder_text = ""

    text = number_to_words(int(feet)) + remainder_text + " feet"

    # Don't say "negative zero feet"
    if is_negative and (feet > 0 or remainder_text):
        text = "negative " + text

    return text


def to_time(when: datetime) -> str:
    """
    Format a time for speech, e.g. "7:18 am" or "12:05 pm".

    Args:
        when: Time to format

    Returns:
        Time as text
    """
    ampm = "pm" if when.hour >= 12 else "am"
    hours = when.hour % 12 or 12
    return "%d:%02d %s" % (hours, when.minute, ampm)


def to_ordinal(day: int) -> str:
    """Return the day of the month with its suffix, e.g. 23 -> "23rd"."""
    return "%d%s" % (day, MONTH_DAY_SUFFIXES[day - 1])


def to_date(when: Union[date, datetime]) -> str:
    """
    Format a date for speech and cards, e.g. "Saturday September 23rd".

    Args:
        when: Date to format

    Returns:
        Date as text
    """
    return "%s %s %s" % (DAYS[when.weekday()].title(),
                         MONTH_NAMES[when.month - 1].title(),
                         to_ordinal(when.day))


def to_list(items: List[str], conjunction: str = "and") -> str:
    """
    Join items the way they would be spoken.

    Args:
        items: Words or phrases to join
        conjunction: Word placed before the last item

    Returns:
        "a", "a and b" or "a, b, and c"
    """
    items = list(items)
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return "%s %s %s" % (items[0], conjunction, items[1])
    return "%s, %s %s" % (", ".join(items[:-1]), conjunction, items[-1])
