#!/usr/bin/env python3
"""
Unit tests for TideDialog.
The fetcher is replaced with a Mock so the dialog can be driven turn by turn.
"""
import os
import sys
from datetime import date, datetime, timedelta
from unittest.mock import Mock

# Set required environment variables before importing
os.environ["app_id"] = "amzn1.ask.skill.test"

# Add the parent directories to the path
test_dir = os.path.dirname(os.path.abspath(__file__))
root_dir = os.path.dirname(os.path.dirname(test_dir))
sys.path.insert(0, root_dir)

import pytest  # noqa: E402

from tides.dialog import (NEED_CITY, NEED_DATE, READY,  # noqa: E402
                          SERVICE_PROBLEM, ConversationState, TideDialog)
from tides.errors import (MalformedTideSeries, NonSuccessStatus,  # noqa: E402
                          RemoteApplicationError, TransportError)
from tides.extractor import TidePrediction, parse_predictions  # noqa: E402
from tides.fetcher import TideFetcher  # noqa: E402
from tides.resolvers import (CityResolver, DateResolver, ResolvedCity,  # noqa: E402
                             ResolvedDate)
from tides.stations import StationDirectory  # noqa: E402
from utils.constants import STATIONS  # noqa: E402

# Wednesday
TODAY = date(2017, 9, 20)
START = datetime(2017, 9, 23, 0, 0)
LEVELS = [2.0, 3.0, 4.0, 2.5, 1.0, 0.5, 2.0, 4.5, 6.0, 5.0]

SATURDAY_QUERY = "begin_date=20170923&range=24"


def make_dialog(fetcher=None):
    """Build a dialog over the built-in stations with a fixed today."""
    directory = StationDirectory(STATIONS)
    if fetcher is None:
        fetcher = Mock()
        fetcher.fetch.return_value = [TidePrediction(START + timedelta(hours=i), level)
                                      for i, level in enumerate(LEVELS)]
    return TideDialog(directory,
                      city_resolver=CityResolver(directory, "Plymouth"),
                      date_resolver=DateResolver(today=lambda: TODAY),
                      fetcher=fetcher)


def test_launch():
    """Test the welcome prompt"""
    print("Testing TideDialog launch...")

    response = make_dialog().handle_start()

    assert response.speech == "Welcome to Cape Cod Tides. Which town?"
    assert response.reprompt.endswith("Which town?")
    assert response.end_session is False

    print("✓ Launch asks for a town")


def test_default_fetcher():
    """Test a dialog built without a fetcher uses the shared NOAA client"""
    print("Testing TideDialog default fetcher...")

    dialog = TideDialog(StationDirectory(STATIONS))

    assert isinstance(dialog.fetcher, TideFetcher)

    print("✓ Default fetcher is a TideFetcher")


def test_oneshot_unknown_city_makes_no_request():
    """Test a one-shot request for an unknown town"""
    print("Testing one-shot with unknown city...")

    dialog = make_dialog()
    state = ConversationState()

    response = dialog.handle_intent("OneshotTideIntent",
                                    {"City": "Nowhereville", "Date": "Saturday"}, state)

    assert response.speech.startswith("I'm sorry, I don't have any data for Nowhereville. ")
    assert "plymouth, barnstable" in response.reprompt
    assert "Which town would you like tide information for?" in response.reprompt
    assert response.end_session is False
    assert state.city is None and state.date is None
    dialog.fetcher.fetch.assert_not_called()

    print("✓ Unknown city reprompts without a request")


def test_oneshot_answers():
    """Test a one-shot request with both slots"""
    print("Testing one-shot with city and date...")

    dialog = make_dialog()
    state = ConversationState()

    response = dialog.handle_intent("OneshotTideIntent",
                                    {"City": "Barnstable", "Date": "Saturday"}, state)

    dialog.fetcher.fetch.assert_called_once_with(8447335, SATURDAY_QUERY)
    assert response.speech == (
        "Saturday September 23rd in Barnstable, the first high tide will be around 2:00 am, "
        "and will peak at about four feet, followed by a low tide at around 5:00 am "
        "that will be about zero and a half feet. The second high tide will be around "
        "8:00 am, and will peak at about six feet.")
    assert response.card_title == "CapeCodTides"
    assert response.card_body == response.speech
    assert response.end_session is True

    print("✓ One-shot answered")


def test_oneshot_defaults():
    """Test a one-shot request with no slots uses Plymouth and today"""
    print("Testing one-shot defaults...")

    dialog = make_dialog()

    response = dialog.handle_intent("OneshotTideIntent", {}, ConversationState())

    dialog.fetcher.fetch.assert_called_once_with(8446493, "date=today")
    assert response.speech.startswith("Today in Plymouth, ")

    print("✓ Defaults used")


def test_oneshot_bad_date_keeps_city():
    """Test a one-shot request with a date that can't be understood"""
    print("Testing one-shot with bad date...")

    dialog = make_dialog()
    state = ConversationState()

    response = dialog.handle_intent("OneshotTideIntent",
                                    {"City": "Wellfleet", "Date": "blue"}, state)

    assert response.speech.startswith("I'm sorry, I didn't understand that date. ")
    assert response.end_session is False
    assert state.city == ResolvedCity("Wellfleet", 8446613)
    assert state.phase == NEED_DATE
    dialog.fetcher.fetch.assert_not_called()

    print("✓ Bad date asks again and keeps city")


def test_oneshot_bad_date_drops_earlier_date():
    """Test a bad one-shot date replaces a date given earlier in the dialog"""
    print("Testing one-shot bad date after an earlier date...")

    dialog = make_dialog()
    state = ConversationState(date=ResolvedDate("Saturday September 23rd", SATURDAY_QUERY))

    response = dialog.handle_intent("OneshotTideIntent",
                                    {"City": "Wellfleet", "Date": "blue"}, state)

    assert response.speech.startswith("I'm sorry, I didn't understand that date. ")
    assert state.city == ResolvedCity("Wellfleet", 8446613)
    assert state.date is None
    assert state.phase == NEED_DATE

    response = dialog.handle_intent("DialogTideIntent", {"City": "Wellfleet"}, state)

    assert response.speech == "For which date?"
    dialog.fetcher.fetch.assert_not_called()

    print("✓ Earlier date dropped")


def test_multi_turn_city_then_date():
    """Test giving the city and then the date"""
    print("Testing dialog city then date...")

    dialog = make_dialog()
    state = ConversationState()

    response = dialog.handle_intent("DialogTideIntent", {"City": "Plymouth"}, state)

    assert response.speech == "For which date?"
    assert response.reprompt == "For which date would you like tide information for Plymouth?"
    assert state.phase == NEED_DATE
    dialog.fetcher.fetch.assert_not_called()

    response = dialog.handle_intent("DialogTideIntent", {"Date": "Saturday"}, state)

    dialog.fetcher.fetch.assert_called_once_with(8446493, SATURDAY_QUERY)
    assert response.speech.startswith("Saturday September 23rd in Plymouth, ")
    assert response.end_session is True
    assert state.phase == NEED_CITY

    print("✓ City then date answered with one request")


def test_multi_turn_date_then_city():
    """Test giving the date before the city"""
    print("Testing dialog date then city...")

    dialog = make_dialog()
    state = ConversationState()

    response = dialog.handle_intent("DialogTideIntent", {"Date": "Saturday"}, state)

    assert response.speech == "For which town would you like tide information for Saturday September 23rd?"
    assert response.reprompt == "For which town?"
    assert state.date == ResolvedDate("Saturday September 23rd", SATURDAY_QUERY)

    response = dialog.handle_intent("DialogTideIntent", {"City": "hingham"}, state)

    dialog.fetcher.fetch.assert_called_once_with(8444775, SATURDAY_QUERY)
    assert response.speech.startswith("Saturday September 23rd in hingham, ")
    assert state.city is None and state.date is None

    print("✓ Date then city answered")


def test_dialog_unknown_city_keeps_date():
    """Test an unknown city in the dialog"""
    print("Testing dialog unknown city...")

    dialog = make_dialog()
    state = ConversationState(date=ResolvedDate("Today", "date=today"))

    response = dialog.handle_intent("DialogTideIntent", {"City": "Atlantis"}, state)

    assert "I don't have any data for Atlantis" in response.speech
    assert state.date == ResolvedDate("Today", "date=today")
    assert state.city is None

    print("✓ Unknown city keeps the date")


def test_dialog_no_slots():
    """Test a dialog turn without slot values"""
    print("Testing dialog with no slots...")

    dialog = make_dialog()

    response = dialog.handle_intent("DialogTideIntent", {"City": None, "Date": None},
                                    ConversationState())
    assert response.speech.startswith("Currently, I know tide information for these towns: ")
    assert response.reprompt == "Which town?"

    state = ConversationState(city=ResolvedCity("Marion", 8447385))
    response = dialog.handle_intent("DialogTideIntent", {}, state)
    assert response.speech == "Please try again saying a day of the week, for example, Saturday. "
    assert state.phase == NEED_DATE

    print("✓ No slots reprompted from state")


def test_supported_cities():
    """Test listing the supported towns"""
    print("Testing supported cities...")

    response = make_dialog().handle_intent("SupportedCitiesIntent", {}, ConversationState())

    assert response.speech.startswith(
        "Currently, I know tide information for these towns: plymouth, barnstable, ")
    assert "duxbury, and hingham. Which town?" in response.speech
    assert response.end_session is False

    print("✓ Supported towns listed")


def test_help_and_unknown_intents():
    """Test help and intents the dialog doesn't know"""
    print("Testing help and unknown intents...")

    dialog = make_dialog()

    help_response = dialog.handle_intent("AMAZON.HelpIntent", {}, ConversationState())
    assert "For a list of supported towns, ask which towns are supported." in help_response.speech
    assert help_response.end_session is False

    for name in ("AMAZON.FallbackIntent", "SomethingElseIntent"):
        response = dialog.handle_intent(name, {}, ConversationState())
        assert response.speech == help_response.speech

    print("✓ Help given for unknown intents")


def test_stop_and_cancel_clear_state():
    """Test that stop and cancel end the conversation"""
    print("Testing stop and cancel...")

    dialog = make_dialog()

    for name in ("AMAZON.StopIntent", "AMAZON.CancelIntent"):
        state = ConversationState(city=ResolvedCity("Marion", 8447385))
        response = dialog.handle_intent(name, {}, state)
        assert response.speech == "Goodbye"
        assert response.end_session is True
        assert state.city is None

    print("✓ Stop and cancel say goodbye")


@pytest.mark.parametrize("error", [
    TransportError("timed out"),
    NonSuccessStatus(500, "https://tidesandcurrents.noaa.gov/api/datagetter"),
    RemoteApplicationError("No Predictions data was found."),
    MalformedTideSeries("Expected a high, low and high tide in 2 predictions"),
])
def test_service_failures_share_one_message(error):
    """Test every fetch failure gives the same answer"""
    print("Testing service failure %s..." % type(error).__name__)

    fetcher = Mock()
    fetcher.fetch.side_effect = error
    dialog = make_dialog(fetcher)
    state = ConversationState(city=ResolvedCity("Plymouth", 8446493))

    response = dialog.handle_intent("DialogTideIntent", {"Date": "Saturday"}, state)

    assert response.speech == SERVICE_PROBLEM
    assert response.card_body == SERVICE_PROBLEM
    assert response.end_session is True
    assert state.phase == NEED_CITY
    fetcher.fetch.assert_called_once_with(8446493, SATURDAY_QUERY)

    print("✓ Failure reported as service problem")


def test_non_finite_levels_are_a_service_problem():
    """Test NOAA levels that aren't numbers give the service problem answer"""
    print("Testing non-finite prediction levels...")

    fetcher = Mock()
    fetcher.fetch.side_effect = lambda station, query: parse_predictions(
        [{"t": "2017-09-23 %02d:00" % i, "v": v}
         for i, v in enumerate(["1", "Infinity", "0", "2", "1"])])
    dialog = make_dialog(fetcher)
    state = ConversationState()

    response = dialog.handle_intent("OneshotTideIntent", {}, state)

    assert response.speech == SERVICE_PROBLEM
    assert response.end_session is True
    fetcher.fetch.assert_called_once_with(8446493, "date=today")

    print("✓ Non-finite levels reported as service problem")


def test_conversation_state_attributes():
    """Test the state round trip through session attributes"""
    print("Testing ConversationState attributes...")

    state = ConversationState(ResolvedCity("Plymouth", 8446493),
                              ResolvedDate("Today", "date=today"))
    attributes = state.to_attributes()

    assert attributes == {"city": {"city": "Plymouth", "station": 8446493},
                          "date": {"display_text": "Today", "query_param": "date=today"}}

    restored = ConversationState.from_attributes(attributes)
    assert restored.city == state.city
    assert restored.date == state.date
    assert restored.phase == READY

    assert ConversationState.from_attributes(None).phase == NEED_CITY
    assert ConversationState().to_attributes() == {}

    # Damaged attributes are dropped rather than failing the turn
    damaged = ConversationState.from_attributes({"city": {"city": "Plymouth"},
                                                 "date": "Saturday"})
    assert damaged.city is None
    assert damaged.date is None

    print("✓ State stored and restored")


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
