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
Lambda function handler for the Cape Cod Tides Alexa Skill.

This module contains the ASK SDK request handlers.  They translate the
Alexa request into slot values and a ConversationState, let the TideDialog
decide what to say, and translate its SkillResponse back into an Alexa
response.
"""

import json
import logging
import sys
import traceback
from typing import Any, Dict, Optional
from xml.sax.saxutils import escape

from ask_sdk_core.dispatch_components import (AbstractExceptionHandler,
                                              AbstractRequestHandler,
                                              AbstractRequestInterceptor,
                                              AbstractResponseInterceptor)
from ask_sdk_core.handler_input import HandlerInput
from ask_sdk_core.serialize import DefaultSerializer
from ask_sdk_core.skill_builder import CustomSkillBuilder
from ask_sdk_core.utils import is_request_type
from ask_sdk_model import RequestEnvelope, Response
from ask_sdk_model.ui import SimpleCard

from storage.session_handler import AlexaSessionHandler, SessionHandler
from tides.dialog import SkillResponse, TideDialog
from utils.config import Config
from utils.constants import SLOTS
from utils.factories import get_tide_dialog
from utils.notify import notify

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

"""
    Anything defined here will persist for the duration of the lambda
    container, so only initialize them once to reduce initialization time.
"""
VERSION = 1
REVISION = 0

ERROR_SPEECH = "%s has experienced an error. " \
               "Please try again later." % Config.SKILL_NAME

SERIALIZER = DefaultSerializer()


def get_event(handler_input: HandlerInput) -> Dict[str, Any]:
    """
    Returns the request envelope as a plain dict for notifications.
    """
    try:
        return SERIALIZER.serialize(handler_input.request_envelope) or {}
    except Exception:
        logger.error("Unable to serialize request envelope: %s", traceback.format_exc())
        return {}


class Skill(object):
    """
    Per-request helper binding the Alexa request to the dialog.
    """

    def __init__(self, handler_input: HandlerInput, dialog: TideDialog,
                 session_handler: SessionHandler = None) -> None:
        self.handler_input = handler_input
        self.request_envelope = handler_input.request_envelope
        self.session = self.request_envelope.session
        self.request = self.request_envelope.request
        self.dialog = dialog
        self.session_handler = session_handler or AlexaSessionHandler(handler_input)
        self.slots: Dict[str, Optional[str]] = {}
        self.state = None

    def initialize(self):
        """Initialize skill state from handler_input"""
        # Amazon says to verify our application id
        app_id = None
        if self.session is not None and self.session.application is not None:
            app_id = self.session.application.application_id
        if Config.APP_ID and app_id != Config.APP_ID:
            raise ValueError("Invoked from unknown application: %s" % app_id)

        # Set all slots to None if no intent or no slots
        self.slots = {slot: None for slot in SLOTS}

        # Load the slot values
        intent = getattr(self.request, "intent", None)
        if intent is not None and intent.slots:
            for slot_name, slot in intent.slots.items():
                if slot_name in SLOTS:
                    val = slot.value
                    self.slots[slot_name] = val.strip() if val else None
                    logger.info("SLOT: %s = %s", slot_name, self.slots[slot_name])

        # Log intent name for debugging
        if intent is not None:
            logger.info("INTENT: %s", intent.name)
        else:
            logger.info("REQUEST: %s", self.request.object_type)

        if self.session is not None and self.session.new:
            logger.info("Session started: %s", self.session.session_id)

        self.state = self.session_handler.get_state()

    def launch_request(self) -> SkillResponse:
        return self.dialog.handle_start()

    def intent_request(self) -> SkillResponse:
        return self.dialog.handle_intent(self.request.intent.name, self.slots, self.state)

    def respond(self, response: SkillResponse) -> Response:
        """
        Build the Alexa response and save the conversation state.
        """
        self.session_handler.set_state(self.state)

        # Use ASK SDK response builder
        response_builder = self.handler_input.response_builder
        response_builder.speak(escape(response.speech))

        if response.reprompt:
            response_builder.ask(escape(response.reprompt))

        if response.card_title:
            response_builder.set_card(SimpleCard(title=response.card_title,
                                                 content=response.card_body))

        response_builder.set_should_end_session(response.end_session)

        return response_builder.response


# ============================================================================
# ASK SDK Request Handlers
# ============================================================================

class BaseIntentHandler(AbstractRequestHandler):
    """Base handler providing common functionality for all handlers"""

    def __init__(self, dialog: TideDialog = None) -> None:
        super().__init__()
        self.dialog = dialog

    def get_skill_helper(self, handler_input):
        """Create and initialize Skill instance from handler_input"""
        dialog = self.dialog or get_tide_dialog()
        skill = Skill(handler_input, dialog, AlexaSessionHandler(handler_input))

        # Initialize skill (verifies the application, loads slots and state)
        skill.initialize()

        return skill


class LaunchRequestHandler(BaseIntentHandler):
    """Handler for Skill Launch"""

    def can_handle(self, handler_input):
        return is_request_type("LaunchRequest")(handler_input)

    def handle(self, handler_input):
        skill = self.get_skill_helper(handler_input)
        return skill.respond(skill.launch_request())


class SessionEndedRequestHandler(BaseIntentHandler):
    """Handler for Session End"""

    def can_handle(self, handler_input):
        return is_request_type("SessionEndedRequest")(handler_input)

    def handle(self, handler_input):
        request = handler_input.request_envelope.request

        # Check for errors in the request
        error = getattr(request, "error", None)
        if error is not None:
            notify(get_event(handler_input), "Error detected",
                   error.message if error.message else "Unknown error")

        reason = getattr(request, "reason", None)
        logger.info("Session ended: %s", reason)

        return handler_input.response_builder.response


class TideIntentHandler(BaseIntentHandler):
    """
    Handler for every intent.  The dialog decides what each one does
    and answers unknown intents with help.
    """

    def can_handle(self, handler_input):
        return is_request_type("IntentRequest")(handler_input)

    def handle(self, handler_input):
        skill = self.get_skill_helper(handler_input)
        return skill.respond(skill.intent_request())


# ============================================================================
# Request and Response Interceptors
# ============================================================================

class RequestLogger(AbstractRequestInterceptor):
    """Log the request envelope."""

    def process(self, handler_input):
        logger.info("Request Envelope: %s", handler_input.request_envelope)


class ResponseLogger(AbstractResponseInterceptor):
    """Log the response envelope."""

    def process(self, handler_input, response):
        logger.info("Response: %s", response)


# ============================================================================
# Exception Handler
# ============================================================================

class AllExceptionHandler(AbstractExceptionHandler):
    """Catch all exception handler."""

    def can_handle(self, handler_input, exception):
        return True

    def handle(self, handler_input, exception):
        logger.error("Exception encountered: %s", exception)

        notify(get_event(handler_input), "Exception", traceback.format_exc())

        handler_input.response_builder.speak(ERROR_SPEECH).set_should_end_session(True)
        return handler_input.response_builder.response


# ============================================================================
# Skill Builder
# ============================================================================

def create_skill(dialog: TideDialog = None):
    """
    Create the skill with all handlers registered.

    Args:
        dialog: Dialog to use; the global one is created on first use if
                not given

    Returns:
        CustomSkill ready to invoke
    """
    sb = CustomSkillBuilder()

    # Register request handlers
    sb.add_request_handler(LaunchRequestHandler(dialog))
    sb.add_request_handler(SessionEndedRequestHandler(dialog))
    sb.add_request_handler(TideIntentHandler(dialog))

    # Register exception handler
    sb.add_exception_handler(AllExceptionHandler())

    # Register request and response interceptors
    sb.add_global_request_interceptor(RequestLogger())
    sb.add_global_response_interceptor(ResponseLogger())

    return sb.create()


# Create the skill instance
skill_instance = create_skill()


# ============================================================================
# Lambda Handler
# ============================================================================

def lambda_handler(event, context=None, skill=None):
    """
    Lambda handler for Alexa skill using ASK SDK.
    """
    try:
        request_envelope = SERIALIZER.deserialize(json.dumps(event), RequestEnvelope)

        response_envelope = (skill or skill_instance).invoke(request_envelope, context)

        # Serialize the response back to dict for Lambda
        if response_envelope:
            return SERIALIZER.serialize(response_envelope)
        return None

    except Exception:
        logger.error("Lambda handler exception: %s", traceback.format_exc())
        notify(event, "Exception", traceback.format_exc())
        return {
                 "version": "1.0",
                 "response":
                 {
                   "outputSpeech":
                   {
                     "type": "SSML",
                     "ssml": "<speak>%s</speak>" % ERROR_SPEECH
                   },
                   "shouldEndSession": True
                 }
               }


def test_one():
    with open(sys.argv[1] if len(sys.argv) > 1 else "test.json") as f:
        event = json.load(f)
        event["session"]["application"]["applicationId"] = Config.APP_ID

        # Print output for testing (this is only used in __main__ test mode)
        print(json.dumps(lambda_handler(event), indent=4))


if __name__ == "__main__":
    logging.basicConfig()
    test_one()
