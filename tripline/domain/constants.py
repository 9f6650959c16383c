"""Domain constants shared by deterministic logic."""

from datetime import time

HOTEL_CHECKIN_TIME = time(hour=15, minute=0)
HOTEL_CHECKOUT_TIME = time(hour=11, minute=0)

DEFAULT_VENUE_MINUTES = 60
VENUE_CATEGORY = "venue"

MINUTES_PER_DAY = 24 * 60
