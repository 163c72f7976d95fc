#!/usr/bin/env python3
"""
Unit tests for notify.
The module logger is replaced with a Mock so the report can be inspected.
"""
import os
import sys
from unittest.mock import Mock, patch

# Set required environment variables before importing
os.environ["app_id"] = "amzn1.ask.skill.test"

# Add the parent directories to the path
test_dir = os.path.dirname(os.path.abspath(__file__))
root_dir = os.path.dirname(os.path.dirname(test_dir))
sys.path.insert(0, root_dir)

import httpx  # noqa: E402
import pytest  # noqa: E402

from tides.errors import NonSuccessStatus  # noqa: E402
from tides.fetcher import TideFetcher  # noqa: E402
from utils.notify import notify  # noqa: E402


def test_lookup_report():
    """Test a failed lookup reports the station and date query"""
    print("Testing notify for a NOAA lookup...")

    event = {"station": 8447435,
             "date_query": "begin_date=20170923&range=24",
             "params": {"station": "8447435", "begin_date": "20170923", "range": "24"}}

    with patch("utils.notify.logger") as logger:
        text = notify(event, "HTTPSTATUS: 500", "URL: https://example.test")

    logged = logger.warning.call_args[0][0]
    assert logged.startswith("NOTIFY:\n\n  HTTPSTATUS: 500\n\n")
    assert "STATION:\n\n  8447435\n" in text
    assert "DATE QUERY:\n\n  begin_date=20170923&range=24\n" in text
    assert "begin_date:     20170923" in text
    assert "MESSAGE:\n\n  URL: https://example.test\n" in text
    assert "REQUEST:" not in text
    assert text in logged

    print("✓ Lookup report names the station and date")


def test_request_report():
    """Test an Alexa request reports its slots and the stored session"""
    print("Testing notify for an Alexa request...")

    event = {
        "session": {"attributes": {
            "city": {"city": "Wellfleet", "station": 8446613},
            "date": {"display_text": "Saturday September 23rd",
                     "query_param": "begin_date=20170923&range=24"}}},
        "request": {
            "type": "IntentRequest",
            "intent": {"name": "DialogTideIntent",
                       "slots": {"City": {"name": "City", "value": "Wellfleet"},
                                 "Date": {"name": "Date"}}}}
    }

    with patch("utils.notify.logger", Mock()):
        text = notify(event, "Exception")

    assert "REQUEST:\n\n  IntentRequest - DialogTideIntent\n" in text
    assert "City:           Wellfleet" in text
    assert "Date:           None" in text
    assert "City:           Wellfleet (station 8446613)" in text
    assert "Date:           Saturday September 23rd (begin_date=20170923&range=24)" in text
    assert "STATION:" not in text
    assert "MESSAGE:" not in text

    print("✓ Request report names the slots and session")


def test_empty_event():
    """Test a report with no event"""
    print("Testing notify with no event...")

    with patch("utils.notify.logger", Mock()):
        text = notify(None, "Exception", "boom")

    assert "MESSAGE:\n\n  boom\n" in text
    assert "EVENT:\n\n{}\n" in text

    print("✓ Empty event reported")


def test_fetcher_failure_is_reported():
    """Test the fetcher reports the station and date query it failed on"""
    print("Testing fetcher failure report...")

    client = httpx.Client(transport=httpx.MockTransport(
        lambda request: httpx.Response(503, text="down")))
    fetcher = TideFetcher(session=client)

    with patch("utils.notify.logger") as logger:
        with pytest.raises(NonSuccessStatus):
            fetcher.fetch(8446613, "date=today")

    logged = logger.warning.call_args[0][0]
    assert "HTTPSTATUS: 503" in logged
    assert "STATION:\n\n  8446613\n" in logged
    assert "DATE QUERY:\n\n  date=today\n" in logged

    print("✓ Fetcher failure names the station and date")


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
