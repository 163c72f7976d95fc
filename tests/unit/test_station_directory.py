#!/usr/bin/env python3
"""
Unit tests for StationDirectory.
Tests lookups, ordering and validation of the station table.
"""
import json
import os
import sys

# Set required environment variables before importing
os.environ["app_id"] = "amzn1.ask.skill.test"

# Add the parent directories to the path
test_dir = os.path.dirname(os.path.abspath(__file__))
root_dir = os.path.dirname(os.path.dirname(test_dir))
sys.path.insert(0, root_dir)

import pytest  # noqa: E402

from tides.stations import StationDirectory  # noqa: E402
from utils.constants import STATIONS  # noqa: E402


def test_lookup_ignores_case():
    """Test that city lookups ignore letter case"""
    print("Testing StationDirectory lookup...")

    directory = StationDirectory(STATIONS)

    assert directory.lookup("plymouth") == 8446493
    assert directory.lookup("Plymouth") == 8446493
    assert directory.lookup("PLYMOUTH") == 8446493
    assert directory.lookup("  Woods Hole ") == 8447939
    assert "Barnstable" in directory

    print("✓ Lookups ignore case")


def test_lookup_unknown_city():
    """Test that unknown and empty cities aren't found"""
    print("Testing StationDirectory unknown city...")

    directory = StationDirectory(STATIONS)

    assert directory.lookup("Nowhereville") is None
    assert directory.lookup("") is None
    assert directory.lookup(None) is None
    assert "woods" not in directory

    print("✓ Unknown cities return None")


def test_list_all_keeps_table_order():
    """Test that the supported towns are listed in table order"""
    print("Testing StationDirectory list_all...")

    directory = StationDirectory({"Wellfleet": 8446613, "Marion": 8447385, "Hingham": 8444775})

    assert directory.list_all() == ["Wellfleet", "Marion", "Hingham"]
    assert list(directory) == ["Wellfleet", "Marion", "Hingham"]
    assert len(directory) == 3
    assert len(StationDirectory(STATIONS)) == 17

    print("✓ Towns listed in table order")


def test_invalid_station_ids_rejected():
    """Test that station ids must be positive integers"""
    print("Testing StationDirectory validation...")

    with pytest.raises(ValueError):
        StationDirectory({"plymouth": 0})
    with pytest.raises(ValueError):
        StationDirectory({"plymouth": -8446493})
    with pytest.raises(ValueError):
        StationDirectory({"plymouth": "8446493"})
    with pytest.raises(ValueError):
        StationDirectory({"plymouth": True})

    print("✓ Invalid station ids rejected")


def test_duplicate_cities_rejected():
    """Test that names differing only by case are rejected"""
    print("Testing StationDirectory duplicates...")

    with pytest.raises(ValueError):
        StationDirectory({"Plymouth": 8446493, "plymouth": 8446493})

    print("✓ Duplicate cities rejected")


def test_from_file(tmp_path):
    """Test loading the station table from a JSON file"""
    print("Testing StationDirectory.from_file...")

    path = tmp_path / "stations.json"
    path.write_text(json.dumps({"Boston": 8443970, "Nantucket": 8449130}))

    directory = StationDirectory.from_file(str(path))

    assert directory.lookup("boston") == 8443970
    assert directory.list_all() == ["Boston", "Nantucket"]

    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps([["Boston", 8443970]]))
    with pytest.raises(ValueError):
        StationDirectory.from_file(str(bad))

    print("✓ Station table loaded from file")


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
