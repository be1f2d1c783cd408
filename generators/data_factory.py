"""
Sample data generator for the Venue Availability Engine.
Produces raw store rows (same column names as the booking platform's tables)
so the demo exercises the same row adapters a real data source would.
"""

import logging
import random
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

TREATMENT_MENU = [
    ("Deep Tissue Massage", 60, 120),
    ("Express Facial", 30, 0),
    ("Hot Stone Therapy", 90, 240),
    ("Manicure", 30, 0),
    ("Signature Ritual", 120, 1440),
]

# Raw literals as they appear in the store, mixed languages included
BOOKING_STATUSES = ["Confirmé", "confirmed", "En cours", "pending", "Annulé", "cancelled", "Terminé"]


class DataGenerator:
    def __init__(self, seed: int = 42):
        self.rng = random.Random(seed)

    def generate_venue(
        self,
        venue_id: str = "hotel_demo",
        start_date: Optional[date] = None,
        therapist_count: int = 3,
        room_count: int = 2,
        booking_count: int = 12
    ) -> Dict[str, List[Dict[str, Any]]]:
        """
        One venue with its deployment calendar, lunch break, pools,
        treatment menu and a day of bookings on start_date.
        """
        if start_date is None: start_date = date.today()

        opening_hour = self.rng.choice([8, 9, 10])
        closing_hour = self.rng.choice([18, 19, 20])
        interval = self.rng.choice([15, 30, 30, 60])

        venue = {
            "id": venue_id,
            "timezone": "Europe/Paris",
            "opening_time": f"{opening_hour:02d}:00:00",
            "closing_time": f"{closing_hour:02d}:00:00",
            "slot_interval": interval,
        }

        # Weekdays around start_date, every week, anchored a week back
        weekday = start_date.isoweekday() % 7
        schedule = {
            "hotel_id": venue_id,
            "schedule_type": "specific_days",
            "days_of_week": sorted({weekday, (weekday + 1) % 7, (weekday + 3) % 7}),
            "recurrence_interval": 1,
            "recurring_start_date": (start_date - timedelta(days=7)).isoformat(),
            "recurring_end_date": None,
        }

        blocked = [{
            "hotel_id": venue_id,
            "label": "Lunch break",
            "start_time": "13:00:00",
            "end_time": "14:00:00",
            "days_of_week": None,
            "is_active": True,
        }]

        therapist_ids = [f"th_{i:02d}" for i in range(therapist_count)]
        therapists = [
            {"hotel_id": venue_id, "therapist_id": tid, "status": "Actif"}
            for tid in therapist_ids
        ]
        rooms = [
            {"hotel_id": venue_id, "id": f"room_{i:02d}", "status": "active"}
            for i in range(room_count)
        ]

        treatments = [
            {"id": f"tr_{i:02d}", "name": name, "duration": duration, "lead_time": lead}
            for i, (name, duration, lead) in enumerate(TREATMENT_MENU)
        ]

        bookings = []
        for i in range(booking_count):
            hour = self.rng.randint(opening_hour, closing_hour - 1)
            minute = self.rng.choice([0, 30])
            _, duration, _ = self.rng.choice(TREATMENT_MENU)
            bookings.append({
                "id": f"bk_{i:04d}",
                "hotel_id": venue_id,
                "booking_date": start_date.isoformat(),
                "booking_time": f"{hour:02d}:{minute:02d}:00",
                "duration": duration,
                # Roughly one in five bookings has no therapist yet
                "therapist_id": self.rng.choice(therapist_ids) if self.rng.random() > 0.2 else None,
                "status": self.rng.choice(BOOKING_STATUSES),
            })

        logger.info(f"Generated venue {venue_id}: {len(bookings)} bookings, {therapist_count} therapists, {room_count} rooms")

        return {
            "venues": [venue],
            "schedules": [schedule],
            "blocked_windows": blocked,
            "therapists": therapists,
            "rooms": rooms,
            "bookings": bookings,
            "treatments": treatments,
        }
