#!/usr/bin/env python3

# =============================================================================
#
# Copyright 2017 by Leland Lucius
#
# Released under the GNU Affero GPL
# See: https://github.com/lllucius/climacast/blob/master/LICENSE
#
# =============================================================================

"""
Command-line interface for testing Cape Cod Tides locally.

This CLI emulates Alexa Skill JSON requests and runs them through the same
lambda_handler the skill uses.  Session attributes are kept in a local JSON
file between invocations, so a multi-turn dialog can be run one command at
a time:

    cli.py launch
    cli.py dialog --city Plymouth
    cli.py dialog --date Saturday
"""

import argparse
import json
import sys
import traceback
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from lambda_function import lambda_handler
from storage.local_handlers import LocalJsonSessionHandler
from utils.config import Config

# Intent names for the simple subcommands
INTENTS = {
    "oneshot": "OneshotTideIntent",
    "dialog": "DialogTideIntent",
    "cities": "SupportedCitiesIntent",
    "help": "AMAZON.HelpIntent",
    "stop": "AMAZON.StopIntent",
    "cancel": "AMAZON.CancelIntent",
}

REQUEST_TYPES = ("LaunchRequest", "SessionEndedRequest")


def build_test_event(intent: str, slots: Optional[Dict[str, str]] = None,
                     attributes: Optional[Dict[str, Any]] = None,
                     session_id: str = "amzn1.echo-api.session.test",
                     new: bool = None) -> Dict[str, Any]:
    """
    Build an Alexa request envelope.

    Args:
        intent: Intent name, or "LaunchRequest" / "SessionEndedRequest"
        slots: Slot name to value
        attributes: Session attributes from the previous turn
        session_id: Session identifier
        new: Whether the session is new; defaults to having no attributes

    Returns:
        Dictionary with the request event
    """
    if new is None:
        new = not attributes

    if intent in REQUEST_TYPES:
        request = {"type": intent}
        if intent == "SessionEndedRequest":
            request["reason"] = "USER_INITIATED"
    else:
        request = {
            "type": "IntentRequest",
            "intent": {
                "name": intent,
                "confirmationStatus": "NONE",
                "slots": {name: {"name": name, "value": value}
                          for name, value in (slots or {}).items()}
            }
        }

    request.update({
        "requestId": "amzn1.echo-api.request.%s" % uuid.uuid4(),
        "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        "locale": "en-US"
    })

    return {
        "version": "1.0",
        "session": {
            "new": new,
            "sessionId": session_id,
            "application": {
                "applicationId": Config.APP_ID
            },
            "attributes": attributes or {},
            "user": {
                "userId": "amzn1.ask.account.test"
            }
        },
        "context": {
            "System": {
                "application": {
                    "applicationId": Config.APP_ID
                },
                "user": {
                    "userId": "amzn1.ask.account.test"
                },
                "device": {
                    "deviceId": "amzn1.ask.device.test"
                }
            }
        },
        "request": request
    }


def parse_slot_args(args: List[str]) -> Dict[str, str]:
    """
    Parse name=value slot arguments, ignoring anything else.
    """
    slots = {}
    for arg in args:
        if "=" not in arg:
            print(f"Ignoring slot argument without '=': {arg}", file=sys.stderr)
            continue
        name, value = arg.split("=", 1)
        if name:
            slots[name] = value
    return slots


def run_event(event: Dict[str, Any], session: LocalJsonSessionHandler,
              skill=None) -> Dict[str, Any]:
    """
    Send one event through the lambda handler and save the session.

    Args:
        event: Alexa request envelope
        session: Local session the attributes are kept in
        skill: Skill to invoke; the lambda's own if not given

    Returns:
        Response envelope
    """
    response = lambda_handler(event, None, skill=skill)

    ended = event["request"]["type"] == "SessionEndedRequest" or \
        response.get("response", {}).get("shouldEndSession", True)
    if ended:
        session.clear()
    else:
        session.set_attributes(response.get("sessionAttributes") or {})

    return response


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="%s CLI - Test the skill locally" % Config.SKILL_NAME,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # One-shot question
  %(prog)s oneshot --city Barnstable --date Saturday

  # Multi-turn dialog, one turn per command
  %(prog)s launch
  %(prog)s dialog --city Plymouth
  %(prog)s dialog --date Saturday

  # Any intent with slots
  %(prog)s intent SupportedCitiesIntent

  # Use JSON input file
  %(prog)s --json-input request.json
        """
    )

    parser.add_argument(
        "--session-id",
        default="amzn1.echo-api.session.test",
        help="Session ID for the request (default: amzn1.echo-api.session.test)"
    )

    parser.add_argument(
        "--session-dir",
        default=".test_sessions",
        help="Directory for JSON session files (default: .test_sessions)"
    )

    parser.add_argument(
        "--json-input",
        help="Path to JSON file containing a request event"
    )

    parser.add_argument(
        "--json-output",
        help="Path to write JSON response (default: stdout)"
    )

    # Subparsers for different request types
    subparsers = parser.add_subparsers(dest="command", help="Request type")

    subparsers.add_parser("launch", help="Launch request")

    oneshot_parser = subparsers.add_parser("oneshot", help="Ask for tides in one go")
    oneshot_parser.add_argument("--city", help="Town to get tides for")
    oneshot_parser.add_argument("--date", help="Date (e.g., Saturday, 2017-09-23)")

    dialog_parser = subparsers.add_parser("dialog", help="Answer one step of the dialog")
    dialog_parser.add_argument("--city", help="Town to get tides for")
    dialog_parser.add_argument("--date", help="Date (e.g., Saturday, 2017-09-23)")

    subparsers.add_parser("cities", help="List supported towns")
    subparsers.add_parser("help", help="Get help information")
    subparsers.add_parser("stop", help="AMAZON.StopIntent")
    subparsers.add_parser("cancel", help="AMAZON.CancelIntent")
    subparsers.add_parser("session_ended", help="Session ended request")

    intent_parser = subparsers.add_parser("intent", help="Any intent with name=value slots")
    intent_parser.add_argument("name", help="Intent name")
    intent_parser.add_argument("slots", nargs="*", help="Slots as name=value")

    return parser


def main(argv: Optional[List[str]] = None, skill=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Load environment variables
    load_dotenv()

    session = LocalJsonSessionHandler(args.session_id, args.session_dir)
    attributes = session.get_attributes()

    # Build request data
    if args.json_input:
        # Load from JSON file
        try:
            with open(args.json_input, "r") as f:
                event = json.load(f)
        except (IOError, json.JSONDecodeError) as e:
            print(f"Error loading JSON input: {e}", file=sys.stderr)
            return 1
    elif args.command:
        if args.command == "launch":
            event = build_test_event("LaunchRequest", attributes=attributes,
                                     session_id=args.session_id)
        elif args.command == "session_ended":
            event = build_test_event("SessionEndedRequest", attributes=attributes,
                                     session_id=args.session_id)
        elif args.command == "intent":
            event = build_test_event(args.name, parse_slot_args(args.slots),
                                     attributes=attributes, session_id=args.session_id)
        else:
            slots = {}
            if args.command in ("oneshot", "dialog"):
                if args.city is not None:
                    slots["City"] = args.city
                if args.date is not None:
                    slots["Date"] = args.date
            event = build_test_event(INTENTS[args.command], slots,
                                     attributes=attributes, session_id=args.session_id)
    else:
        parser.print_help()
        return 1

    # Process request
    try:
        response = run_event(event, session, skill=skill)
    except Exception as e:
        print(f"Error processing request: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1

    # Output response
    if args.json_output:
        try:
            with open(args.json_output, "w") as f:
                json.dump(response, f, indent=2)
            print(f"Response written to {args.json_output}")
        except IOError as e:
            print(f"Error writing JSON output: {e}", file=sys.stderr)
            return 1
    else:
        # Pretty print to stdout
        body = response.get("response", {})
        print("\n" + "=" * 60)
        print("RESPONSE")
        print("=" * 60)
        print(f"\nSpeech: {body.get('outputSpeech', {}).get('ssml', '')}")
        if body.get("reprompt"):
            print(f"\nReprompt: {body['reprompt'].get('outputSpeech', {}).get('ssml', '')}")
        if body.get("card"):
            print(f"\nCard: {body['card'].get('title')}: {body['card'].get('content')}")
        print(f"\nEnd Session: {body.get('shouldEndSession', True)}")
        if response.get("sessionAttributes"):
            print(f"\nSession Attributes: {json.dumps(response['sessionAttributes'], indent=2)}")
        print("\n" + "=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
