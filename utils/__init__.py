"""
Utility modules for Cape Cod Tides.

This package contains utility functions, constants, and helper classes.
"""

from .constants import (DAYS, MONTH_DAY_SUFFIXES, MONTH_NAMES, NUMBER_WORDS,
                        RANGE_HOURS, SLOTS, STATIONS, TENS_WORDS,
                        TODAY_DISPLAY_TEXT, TODAY_QUERY_PARAM)

__all__ = ['DAYS', 'MONTH_DAY_SUFFIXES', 'MONTH_NAMES', 'NUMBER_WORDS',
           'RANGE_HOURS', 'SLOTS', 'STATIONS', 'TENS_WORDS',
           'TODAY_DISPLAY_TEXT', 'TODAY_QUERY_PARAM']
