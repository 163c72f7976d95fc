#!/usr/bin/env python3
"""
Unit tests for the speech converters.
Tests heights, times, dates and lists as they will be spoken.
"""
import os
import sys
from datetime import date, datetime

# Set required environment variables before importing
os.environ["app_id"] = "amzn1.ask.skill.test"

# Add the parent directories to the path
test_dir = os.path.dirname(os.path.abspath(__file__))
root_dir = os.path.dirname(os.path.dirname(test_dir))
sys.path.insert(0, root_dir)

import pytest  # noqa: E402

from utils import converters  # noqa: E402


def test_number_to_words():
    """Test whole numbers as words"""
    print("Testing number_to_words...")

    assert converters.number_to_words(0) == "zero"
    assert converters.number_to_words(4) == "four"
    assert converters.number_to_words(13) == "thirteen"
    assert converters.number_to_words(20) == "twenty"
    assert converters.number_to_words(42) == "forty two"
    assert converters.number_to_words(150) == "150"

    with pytest.raises(ValueError):
        converters.number_to_words(-1)

    print("✓ Numbers converted to words")


def test_to_height_rounds_to_half_foot():
    """Test heights rounded to the nearest half foot"""
    print("Testing to_height rounding...")

    assert converters.to_height(4.1) == "four feet"
    assert converters.to_height(4.3) == "four and a half feet"
    assert converters.to_height(4.8) == "five feet"
    assert converters.to_height(6.0) == "six feet"
    assert converters.to_height(0.5) == "zero and a half feet"
    assert converters.to_height("3.456") == "three and a half feet"
    assert converters.to_height(9.9) == "ten feet"

    print("✓ Heights rounded to the half foot")


def test_to_height_negative():
    """Test negative heights keep their sign"""
    print("Testing to_height negative values...")

    assert converters.to_height(-4.3) == "negative four and a half feet"
    assert converters.to_height(-0.8) == "negative one feet"
    assert converters.to_height(-0.1) == "zero feet"

    print("✓ Negative heights spoken with sign")


def test_to_time():
    """Test times in 12 hour form"""
    print("Testing to_time...")

    assert converters.to_time(datetime(2017, 9, 23, 7, 18)) == "7:18 am"
    assert converters.to_time(datetime(2017, 9, 23, 12, 5)) == "12:05 pm"
    assert converters.to_time(datetime(2017, 9, 23, 0, 30)) == "12:30 am"
    assert converters.to_time(datetime(2017, 9, 23, 19, 42)) == "7:42 pm"

    print("✓ Times formatted")


def test_to_date():
    """Test dates as weekday, month and ordinal day"""
    print("Testing to_date...")

    assert converters.to_date(date(2017, 9, 23)) == "Saturday September 23rd"
    assert converters.to_date(date(2017, 6, 1)) == "Thursday June 1st"
    assert converters.to_date(datetime(2017, 6, 22, 13, 0)) == "Thursday June 22nd"
    assert converters.to_date(date(2017, 8, 11)) == "Friday August 11th"

    print("✓ Dates formatted")


def test_to_list():
    """Test lists joined the way they are spoken"""
    print("Testing to_list...")

    assert converters.to_list([]) == ""
    assert converters.to_list(["plymouth"]) == "plymouth"
    assert converters.to_list(["plymouth", "marion"]) == "plymouth and marion"
    assert converters.to_list(["plymouth", "marion", "hingham"]) == "plymouth, marion, and hingham"
    assert converters.to_list(["a", "b"], conjunction="or") == "a or b"

    print("✓ Lists joined")


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
