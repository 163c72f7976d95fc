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
Dialog handling for Cape Cod Tides.

Handles two models, both a one-shot ask and tell model, and a multi-turn
dialog model.  If the user provides an incorrect slot in a one-shot model,
it will direct to the dialog model.

One-shot model:
    User:  "Alexa, ask Cape Cod Tides when is the high tide in Barnstable on Saturday"
    Alexa: "Saturday June 20th in Barnstable, the first high tide will be around 7:18 am, ..."

Dialog model:
    User:  "Alexa, open Cape Cod Tides"
    Alexa: "Welcome to Cape Cod Tides. Which town?"
    User:  "Plymouth"
    Alexa: "For which date?"
    User:  "this Saturday"
    Alexa: "Saturday June 20th in Plymouth, the first high tide will be around 7:18 am, ..."

Nothing here knows about the Alexa SDK.  Handlers receive the slot values
and a ConversationState, update the state in place, and return a
SkillResponse that the caller turns into whatever the platform needs.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from tides.errors import TideError
from tides.extractor import TideExtractor
from tides.fetcher import TideFetcher
from tides.resolvers import (CityResolver, DateResolver, ResolvedCity,
                             ResolvedDate)
from tides.stations import StationDirectory
from utils import converters
from utils.config import Config

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

# Dialog phases, derived from what the ConversationState holds
NEED_CITY = "NEED_CITY"
NEED_DATE = "NEED_DATE"
READY = "READY"

WHICH_TOWN = "Which town?"
HELP_TEXT = "I can lead you through providing a town and " \
            "day of the week to get tide information, " \
            "or you can simply open %s and ask a question like, " \
            "get tide information for Barnstable on Saturday. " \
            "For a list of supported towns, ask which towns are supported. " % Config.SKILL_NAME
DATE_RETRY = "Please try again saying a day of the week, for example, Saturday. "
SERVICE_PROBLEM = "Sorry, the National Oceanic tide service is experiencing a problem. " \
                  "Please try again later"
GOODBYE = "Goodbye"


class SkillResponse(object):
    """
    What to say back to the user.

    A response with a reprompt expects an answer and keeps the session
    open; one without ends the conversation unless told otherwise.
    """

    def __init__(self, speech: str, reprompt: Optional[str] = None,
                 card_title: Optional[str] = None, card_body: Optional[str] = None,
                 end_session: Optional[bool] = None) -> None:
        self.speech = speech
        self.reprompt = reprompt
        self.card_title = card_title
        self.card_body = card_body
        self.end_session = reprompt is None if end_session is None else end_session

    @classmethod
    def ask(cls, speech: str, reprompt: str) -> "SkillResponse":
        return cls(speech, reprompt)

    @classmethod
    def tell(cls, speech: str) -> "SkillResponse":
        return cls(speech)

    @classmethod
    def tell_with_card(cls, speech: str, title: str, body: str) -> "SkillResponse":
        return cls(speech, card_title=title, card_body=body)

    def __repr__(self):
        return "SkillResponse(speech=%r, reprompt=%r, end_session=%r)" % \
               (self.speech, self.reprompt, self.end_session)


class ConversationState(object):
    """
    The city and date collected so far in this conversation.

    Stored in the session attributes between turns under the "city" and
    "date" keys.
    """

    CITY_KEY = "city"
    DATE_KEY = "date"

    def __init__(self, city: Optional[ResolvedCity] = None,
                 date: Optional[ResolvedDate] = None) -> None:
        self.city = city
        self.date = date

    @classmethod
    def from_attributes(cls, attributes: Optional[Mapping[str, Any]]) -> "ConversationState":
        """
        Rebuild the state from session attributes.

        Anything that can't be understood is dropped so the dialog starts
        over instead of failing.
        """
        state = cls()
        if not attributes:
            return state

        if attributes.get(cls.CITY_KEY):
            try:
                state.city = ResolvedCity.from_dict(attributes[cls.CITY_KEY])
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning("Ignoring session city %r: %s", attributes[cls.CITY_KEY], e)

        if attributes.get(cls.DATE_KEY):
            try:
                state.date = ResolvedDate.from_dict(attributes[cls.DATE_KEY])
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning("Ignoring session date %r: %s", attributes[cls.DATE_KEY], e)

        return state

    def to_attributes(self) -> Dict[str, Any]:
        attributes = {}
        if self.city is not None:
            attributes[self.CITY_KEY] = self.city.to_dict()
        if self.date is not None:
            attributes[self.DATE_KEY] = self.date.to_dict()
        return attributes

    def clear(self) -> None:
        self.city = None
        self.date = None

    @property
    def phase(self) -> str:
        if self.city is None:
            return NEED_CITY
        if self.date is None:
            return NEED_DATE
        return READY

    def __repr__(self):
        return "ConversationState(city=%r, date=%r)" % (self.city, self.date)


class TideDialog(object):
    """
    Decides what to say next based on the slots and the conversation so far.

    Intents are dispatched through intent_handlers, a mapping from intent
    name to a handler taking (slots, state).  Intents that aren't in the
    table get the help response.
    """

    def __init__(self, directory: StationDirectory,
                 city_resolver: CityResolver = None,
                 date_resolver: DateResolver = None,
                 fetcher: TideFetcher = None,
                 extractor: TideExtractor = None) -> None:
        self.directory = directory
        self.city_resolver = city_resolver or CityResolver(directory)
        self.date_resolver = date_resolver or DateResolver()
        if fetcher is None:
            # factories imports this module
            from utils.factories import get_tide_fetcher
            fetcher = get_tide_fetcher()
        self.fetcher = fetcher
        self.extractor = extractor or TideExtractor()

        self.intent_handlers: Dict[str, Callable[[Mapping[str, Optional[str]],
                                                  ConversationState], SkillResponse]] = {
            "OneshotTideIntent": self.oneshot_tide,
            "DialogTideIntent": self.dialog_tide,
            "SupportedCitiesIntent": self.supported_cities,
            "AMAZON.HelpIntent": self.help,
            "AMAZON.FallbackIntent": self.help,
            "AMAZON.StopIntent": self.goodbye,
            "AMAZON.CancelIntent": self.goodbye,
        }

    def handle_start(self) -> SkillResponse:
        """Welcome the user and ask for a town."""
        speech = "Welcome to %s. %s" % (Config.SKILL_NAME, WHICH_TOWN)
        reprompt = HELP_TEXT + WHICH_TOWN
        return SkillResponse.ask(speech, reprompt)

    def handle_intent(self, name: str, slots: Optional[Mapping[str, Optional[str]]],
                      state: ConversationState) -> SkillResponse:
        """
        Handle one turn.

        Args:
            name: Intent name
            slots: Slot name to value, values may be None
            state: Conversation state, updated in place

        Returns:
            SkillResponse
        """
        handler = self.intent_handlers.get(name)
        if handler is None:
            logger.warning("Unhandled intent %s", name)
            handler = self.help

        logger.info("DIALOG: %s %s", name, state.phase)

        return handler(slots or {}, state)

    # -------------------------------------------------------------------------
    # Intent handlers
    # -------------------------------------------------------------------------

    def oneshot_tide(self, slots, state):
        """
        This handles the one-shot interaction, where the user utters a phrase like:
        'Alexa, open Cape Cod Tides and get tide information for Barnstable on Saturday'.
        If there is an error in a slot, this will guide the user to the dialog approach.
        """
        # Determine city, using default if none provided
        city = self.city_resolver.resolve(slots.get("City"), allow_default=True)
        if city.error:
            # invalid city. move to the dialog
            return self.unknown_city(city)

        # Determine custom date
        date = self.date_resolver.resolve(slots.get("Date"))
        if date is None:
            # Invalid date. set city in session and prompt for date
            state.city = city
            state.date = None
            return self.unknown_date()

        # all slots filled, either from the user or by default values. Move to final request
        return self.final_tide_response(city, date, state)

    def dialog_tide(self, slots, state):
        """
        Determine if this turn is for city, for date, or an error.
        We could be passed slots with values, no slots, slots with no value.
        """
        if slots.get("City"):
            return self.city_dialog(slots, state)
        elif slots.get("Date"):
            return self.date_dialog(slots, state)
        return self.no_slot_dialog(slots, state)

    def supported_cities(self, slots, state):
        speech = "Currently, I know tide information for these towns: %s. %s" % \
                 (self.all_stations_text(), WHICH_TOWN)
        return SkillResponse.ask(speech, WHICH_TOWN)

    def help(self, slots, state):
        speech = HELP_TEXT + "Or you can say exit. " + WHICH_TOWN
        return SkillResponse.ask(speech, WHICH_TOWN)

    def goodbye(self, slots, state):
        state.clear()
        return SkillResponse.tell(GOODBYE)

    # -------------------------------------------------------------------------
    # Dialog steps
    # -------------------------------------------------------------------------

    def city_dialog(self, slots, state):
        """Handles the dialog step where the user provides a city."""
        city = self.city_resolver.resolve(slots.get("City"), allow_default=False)
        if city.error:
            return self.unknown_city(city)

        # if we don't have a date yet, go to date. If we have a date, we perform the final request
        if state.date is not None:
            return self.final_tide_response(city, state.date, state)

        state.city = city
        speech = "For which date?"
        reprompt = "For which date would you like tide information for %s?" % city.city
        return SkillResponse.ask(speech, reprompt)

    def date_dialog(self, slots, state):
        """Handles the dialog step where the user provides a date."""
        date = self.date_resolver.resolve(slots.get("Date"))
        if date is None:
            return self.unknown_date()

        # if we don't have a city yet, go to city. If we have a city, we perform the final request
        if state.city is not None:
            return self.final_tide_response(state.city, date, state)

        # The user provided a date out of turn. Set date in session and prompt for city
        state.date = date
        speech = "For which town would you like tide information for %s?" % date.display_text
        reprompt = "For which town?"
        return SkillResponse.ask(speech, reprompt)

    def no_slot_dialog(self, slots, state):
        """
        Handle no slots, or slot(s) with no values.
        In the case of a dialog based skill with multiple slots,
        when passed a slot with no value, we cannot have confidence
        it is the correct slot type so we rely on session state to
        determine the next turn in the dialog, and reprompt.
        """
        if state.city is not None:
            return SkillResponse.ask(DATE_RETRY, DATE_RETRY)

        return self.supported_cities(slots, state)

    def unknown_city(self, city: ResolvedCity) -> SkillResponse:
        reprompt = "Currently, I know tide information for these coastal towns: %s. " \
                   "Which town would you like tide information for?" % self.all_stations_text()

        # if we received a value for the incorrect city, repeat it to the user,
        # otherwise we received an empty slot
        if city.raw_city:
            speech = "I'm sorry, I don't have any data for %s. %s" % (city.raw_city, reprompt)
        else:
            speech = reprompt

        return SkillResponse.ask(speech, reprompt)

    def unknown_date(self) -> SkillResponse:
        reprompt = DATE_RETRY + "For which date would you like tide information?"
        speech = "I'm sorry, I didn't understand that date. " + reprompt
        return SkillResponse.ask(speech, reprompt)

    def final_tide_response(self, city: ResolvedCity, date: ResolvedDate,
                            state: ConversationState) -> SkillResponse:
        """
        Both the one-shot and dialog based paths lead to this method to issue the request, and
        respond to the user with the final answer.
        """
        state.clear()

        try:
            predictions = self.fetcher.fetch(city.station_id, date.query_param)
            tides = self.extractor.extract(predictions)
        except TideError as e:
            logger.error("Unable to get tides for %s (%s) %s: %s",
                         city.city, city.station_id, date.query_param, e)
            return SkillResponse.tell_with_card(SERVICE_PROBLEM, Config.CARD_TITLE, SERVICE_PROBLEM)

        speech = "%s in %s, the first high tide will be around %s, " \
                 "and will peak at about %s, " \
                 "followed by a low tide at around %s " \
                 "that will be about %s. " \
                 "The second high tide will be around %s, " \
                 "and will peak at about %s." % \
                 (date.display_text, city.city,
                  tides.first_high.formatted_time, tides.first_high.formatted_height,
                  tides.low.formatted_time, tides.low.formatted_height,
                  tides.second_high.formatted_time, tides.second_high.formatted_height)

        return SkillResponse.tell_with_card(speech, Config.CARD_TITLE, speech)

    def all_stations_text(self) -> str:
        return converters.to_list(self.directory.list_all())
