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
Local testing handlers for Cape Cod Tides.

This module provides a file-based implementation of the session handler
for local testing without the Alexa service carrying the session.
"""

import json
import logging
import os
import re
from typing import Any, Dict

from storage.session_handler import SessionHandler

# Configure logging
logger = logging.getLogger(__name__)


class LocalJsonSessionHandler(SessionHandler):
    """
    Session handler implementation using local JSON files for testing.

    Session attributes are stored in a single JSON file per session so a
    multi-turn dialog can be run one command at a time:
    - session_dir/
      - <session_id>.json
    """

    def __init__(self, session_id: str, session_dir: str = ".test_sessions") -> None:
        """
        Initialize with a session ID and local directory for session storage.

        Args:
            session_id: Session identifier
            session_dir: Directory to store session JSON files
        """
        super().__init__()
        self.session_id = session_id
        self.session_dir = session_dir

        # Create session directory if it doesn't exist
        os.makedirs(session_dir, exist_ok=True)

        self._attributes = self._load_attributes()

    def _get_file_path(self) -> str:
        """
        Get the file path for the session.

        Returns:
            Path to the session file
        """
        # Sanitize session_id for filename
        safe_id = re.sub(r"[^\w\s-]", "_", self.session_id).strip().replace(" ", "_")
        return os.path.join(self.session_dir, f"{safe_id}.json")

    def _load_attributes(self) -> Dict[str, Any]:
        """Load attributes from the local JSON file."""
        file_path = self._get_file_path()

        if not os.path.exists(file_path):
            return {}

        try:
            with open(file_path, "r") as f:
                attributes = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading session {self.session_id}: {e}")
            return {}

        return attributes if isinstance(attributes, dict) else {}

    def get_attributes(self) -> Dict[str, Any]:
        """
        Get the session attributes.

        Returns:
            Dict of session attributes
        """
        return self._attributes

    def set_attributes(self, attributes: Dict[str, Any]) -> None:
        """
        Replace the session attributes and save them.

        Args:
            attributes: New session attributes
        """
        self._attributes = dict(attributes or {})

        with open(self._get_file_path(), "w") as f:
            json.dump(self._attributes, f, indent=2)

    def clear(self) -> None:
        """End the session by removing its file."""
        self._attributes = {}
        file_path = self._get_file_path()
        if os.path.exists(file_path):
            os.remove(file_path)
