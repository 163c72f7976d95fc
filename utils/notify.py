#!/usr/bin/python3

# =============================================================================
#
# Copyright 2017 by Leland Lucius
#
# Released under the GNU Affero GPL
# See: https://github.com/lllucius/climacast/blob/master/LICENSE
#
# =============================================================================

import json
import logging
from typing import Any, Dict, List, Optional

from utils.constants import SLOTS

# Configure logging
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


def lookup_lines(event: Dict[str, Any]) -> List[str]:
    """
    Describe the NOAA lookup a fetcher event was for.
    """
    if "station" not in event:
        return []

    params = event.get("params") or {}
    lines = ["STATION:", "", "  %s" % event["station"], ""]

    query = event.get("date_query")
    if query:
        lines += ["DATE QUERY:", "", "  %s" % query, ""]

    if params:
        lines += ["PARAMS:", ""]
        lines += ["  %-15s %s" % (name + ":", value) for name, value in sorted(params.items())]
        lines.append("")

    return lines


def request_lines(event: Dict[str, Any]) -> List[str]:
    """
    Describe the Alexa request, its City and Date slots and the city and
    date stored in the session.
    """
    lines = []

    request = event.get("request") or {}
    intent = request.get("intent") or {}
    if request:
        name = request.get("type", "")
        if intent.get("name"):
            name += " - " + intent["name"]
        lines += ["REQUEST:", "", "  " + name, ""]

    slots = intent.get("slots") or {}
    if slots:
        lines += ["SLOTS:", ""]
        for slot in SLOTS:
            lines.append("  %-15s %s" % (slot + ":", (slots.get(slot) or {}).get("value")))
        lines.append("")

    attributes = (event.get("session") or {}).get("attributes") or {}
    city = attributes.get("city") or {}
    date = attributes.get("date") or {}
    if city or date:
        lines += ["SESSION:", ""]
        if city:
            lines.append("  %-15s %s (station %s)" % ("City:", city.get("city"), city.get("station")))
        if date:
            lines.append("  %-15s %s (%s)" % ("Date:", date.get("display_text"), date.get("query_param")))
        lines.append("")

    return lines


def notify(event: Optional[Dict[str, Any]], sub: str, msg: Optional[str] = None) -> str:
    """
    Report an unusual event, either a failed NOAA lookup or an Alexa
    request the skill couldn't handle.

    Args:
        event: Fetcher lookup ({"station", "date_query", "params"}) or the
               request envelope
        sub: Short subject
        msg: Details, like a traceback or the NOAA response body

    Returns:
        The logged report
    """
    event = event or {}

    lines = lookup_lines(event) + request_lines(event)
    if msg:
        lines += ["MESSAGE:", "", "  " + str(msg), ""]
    lines += ["EVENT:", "", json.dumps(event, indent=4, default=str), ""]

    text = "\n".join(lines)
    logger.warning(f"NOTIFY:\n\n  {sub}\n\n{text}")

    return text
