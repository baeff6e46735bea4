#!/usr/bin/env python
# scripts/validate_timetable.py

import argparse
import os
import sys

# This script is intended to be run from the command line.
# We add the backend directory to the Python path to allow imports.
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from londontimes.services.london_times.errors import InvalidDataError
from londontimes.services.london_times.store import LondonTimesStore


def validate_timetable(path: str) -> int:
    """
    Checks a London timetable file before it is shipped or uploaded.

    Workflow:
    1. Parse the file exactly as the store would on load; a parse failure is fatal.
    2. Decode every day-record and list the ones the lookup would reject,
       with the fields that were missing, mistyped, or not valid HH:mm times.

    Returns a process exit code: 0 if every entry is usable, 1 otherwise.
    """
    print(f"--- Validating timetable: {path} ---")
    try:
        with open(path, 'rb') as f:
            raw_text = f.read()
    except OSError as e:
        print(f"ERROR: Could not read {path}. Details: {e}")
        return 1

    store = LondonTimesStore()
    try:
        store.load(raw_text)
    except InvalidDataError as e:
        print(f"ERROR: {e}")
        return 1

    dates = store.dates()
    problems = store.audit()
    print(f"INFO: Found {len(dates)} day entries.")

    if not problems:
        print("SUCCESS: Every entry is usable.")
        return 0

    for date_key, errors in sorted(problems.items()):
        print(f"  MALFORMED: {date_key}")
        for field_name, messages in errors.items():
            print(f"    {field_name}: {' '.join(messages)}")
    print(f"\n--- {len(problems)} of {len(dates)} entries would be skipped by lookups. ---")
    return 1


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Validate a London prayer timetable JSON file.")
    parser.add_argument("path", help="Path to the timetable JSON file")
    sys.exit(validate_timetable(parser.parse_args().path))
