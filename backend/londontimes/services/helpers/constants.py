# londontimes/services/helpers/constants.py

DEFAULT_TIMEZONE = "Europe/London"
DEFAULT_RESOURCE_NAME = "LondonPrayerTimes.json"

# Order matters: this is the order the unified calculator returns times in.
PRAYER_FIELDS = ("fajr", "sunrise", "dhuhr", "asr", "maghrib", "isha")

# Accepted external spellings for maghrib, canonical name first.
MAGHRIB_KEYS = ("maghrib", "magrib")
