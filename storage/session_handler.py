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
Session handlers for Cape Cod Tides.

This module provides base and Alexa-specific implementations for moving
the ConversationState in and out of the session attributes.
"""

import logging
from typing import Any, Dict

from ask_sdk_core.handler_input import HandlerInput

from tides.dialog import ConversationState

# Configure logging
logger = logging.getLogger(__name__)


class SessionHandler(object):
    """
    Base class for handling conversation state between turns.
    This allows different backends for session storage.
    """

    def __init__(self) -> None:
        """Initialize the session handler."""
        pass

    def get_attributes(self) -> Dict[str, Any]:
        """Get the raw session attributes."""
        raise NotImplementedError("Subclass must implement get_attributes()")

    def set_attributes(self, attributes: Dict[str, Any]) -> None:
        """Replace the raw session attributes."""
        raise NotImplementedError("Subclass must implement set_attributes()")

    def get_state(self) -> ConversationState:
        """
        Get the conversation state stored in the session.

        Returns:
            ConversationState, empty if nothing was stored
        """
        return ConversationState.from_attributes(self.get_attributes())

    def set_state(self, state: ConversationState) -> None:
        """
        Store the conversation state in the session.

        Attributes that don't belong to the conversation state are kept.

        Args:
            state: State to store
        """
        attributes = dict(self.get_attributes() or {})
        attributes.pop(ConversationState.CITY_KEY, None)
        attributes.pop(ConversationState.DATE_KEY, None)
        attributes.update(state.to_attributes())
        self.set_attributes(attributes)


class AlexaSessionHandler(SessionHandler):
    """
    Session handler implementation using Alexa's attributes_manager.
    The attributes travel with the session and are returned to the skill
    on the next turn of the same conversation.
    """

    def __init__(self, handler_input: HandlerInput) -> None:
        """
        Initialize with Alexa handler input for accessing attributes_manager.

        Args:
            handler_input: ASK SDK HandlerInput object
        """
        super().__init__()
        self.handler_input = handler_input
        self.attr_mgr = handler_input.attributes_manager

    def get_attributes(self) -> Dict[str, Any]:
        """
        Get the session attributes.

        Returns:
            Dict of session attributes
        """
        return self.attr_mgr.session_attributes or {}

    def set_attributes(self, attributes: Dict[str, Any]) -> None:
        """
        Replace the session attributes.

        Args:
            attributes: New session attributes
        """
        logger.info("SESSION: %s", attributes)
        self.attr_mgr.session_attributes = attributes
