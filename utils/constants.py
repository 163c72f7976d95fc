"""
Constants and configuration data for the Cape Cod Tides Alexa skill.

This module contains all constant definitions used throughout the skill,
including the station table, slot names and the word tables used when
building speech.
"""

# Slot names used in Alexa interaction model
SLOTS = [
    "City",
    "Date",
]

# Example city to NOAA station mapping.  Station ids can be found on:
# http://tidesandcurrents.noaa.gov/map/
STATIONS = {
    "plymouth": 8446493,
    "barnstable": 8447335,
    "sesuit harbor": 8447241,
    "wellfleet": 8446613,
    "provincetown": 8446121,
    "chatham stage harbor": 8447505,
    "harwichport wychmere harbor": 8447506,
    "south yarmouth bass river": 8447504,
    "dennisport": 8447525,
    "hyannisport": 8447605,
    "falmouth": 8447865,
    "woods hole": 8447939,
    "marion": 8447385,
    "new bedford": 8447584,
    "westport": 8447975,
    "duxbury": 8446166,
    "hingham": 8444775,
}

# Day names
DAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

# Month names
MONTH_NAMES = [
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
]

# Ordinal suffixes for the day of the month, indexed by day - 1
MONTH_DAY_SUFFIXES = [
    "st", "nd", "rd", "th", "th", "th", "th", "th", "th", "th",
    "th", "th", "th", "th", "th", "th", "th", "th", "th", "th",
    "st", "nd", "rd", "th", "th", "th", "th", "th", "th", "th",
    "st",
]

# Whole numbers as words
NUMBER_WORDS = [
    "zero",
    "one",
    "two",
    "three",
    "four",
    "five",
    "six",
    "seven",
    "eight",
    "nine",
    "ten",
    "eleven",
    "twelve",
    "thirteen",
    "fourteen",
    "fifteen",
    "sixteen",
    "seventeen",
    "eighteen",
    "nineteen",
]

# Multiples of ten as words, indexed by the tens digit
TENS_WORDS = [
    "",
    "",
    "twenty",
    "thirty",
    "forty",
    "fifty",
    "sixty",
    "seventy",
    "eighty",
    "ninety",
]

# Alexa AMAZON.DATE values that are not calendar dates
DATE_PRESENT_REF = "PRESENT_REF"
DATE_WEEKEND_SUFFIX = "-WE"

# NOAA request parameter used when no date was given
TODAY_QUERY_PARAM = "date=today"
TODAY_DISPLAY_TEXT = "Today"

# Number of hours of predictions requested for a given day
RANGE_HOURS = 24
