"""
Main Execution Script for the Venue Availability Engine.
Loads (or generates) sample venue data, then prints the open slots for a date.
"""

import os
import sys
import json
import logging
import argparse
from datetime import date

# Add current directory to path so imports work
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from generators.data_factory import DataGenerator
from availability import AvailabilityService, InMemoryVenueDataSource, AvailabilityError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger("Main")

# --- CONFIGURATION ---
CACHE_FILENAME = "debug_data.json"
# ---------------------


def save_debug_data(rows: dict, filename: str):
    """Helper to save generated rows so runs are reproducible."""
    with open(filename, 'w') as f:
        json.dump(rows, f, indent=2)
    logger.info(f"💾 Saved debug data to {filename}")


def load_cached_data(filename: str):
    """
    Helper to load raw JSON rows. Returns None if the cache is missing or unreadable.
    """
    try:
        with open(filename, 'r') as f:
            rows = json.load(f)
        logger.info(f"📂 Loaded cached data from {filename}")
        return rows
    except (FileNotFoundError, json.JSONDecodeError):
        logger.warning(f"⚠️ Cache file {filename} not found or invalid. Falling back to Generator.")
        return None


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Print open booking slots for a venue and date.")
    parser.add_argument("--venue", default="hotel_demo", help="Venue id")
    parser.add_argument("--date", type=date.fromisoformat, default=date.today(), help="ISO date (default: today)")
    parser.add_argument("--treatment", action="append", default=[], help="Treatment id (repeatable)")
    parser.add_argument("--cache", default=CACHE_FILENAME, help="JSON rows file")
    parser.add_argument("--no-cache", action="store_true", help="Always regenerate sample data")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    # --- PHASE 1: DATA ACQUISITION (Cache vs. Generator) ---
    rows = None if args.no_cache else load_cached_data(args.cache)
    if not rows:
        rows = DataGenerator().generate_venue(venue_id=args.venue, start_date=args.date)
        save_debug_data(rows, args.cache)

    source = InMemoryVenueDataSource.from_rows(rows)

    # --- PHASE 2: AVAILABILITY ---
    service = AvailabilityService(source)
    request = {"venueId": args.venue, "date": args.date.isoformat(), "treatmentIds": args.treatment}

    try:
        result = service.get_available_slots(request)
    except AvailabilityError as e:
        logger.error(f"❌ {e}")
        return 1

    # --- PHASE 3: REPORTING ---
    print("\n" + "="*50)
    print(f"📅 AVAILABILITY {args.venue} {args.date.isoformat()}")
    print("="*50)
    print(json.dumps(result.to_response(), indent=2))

    if result.rejections:
        print("\n🔍 REJECTED SLOTS")
        for constraint_type, count in sorted(result.rejections.items()):
            print(f"   {constraint_type}: {count}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
