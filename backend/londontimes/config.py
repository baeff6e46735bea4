import json
import os
from dotenv import load_dotenv

# Load .env file
dotenv_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), '.env')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path)


def _adjustments_from_env(name):
    """Reads per-prayer minute adjustments, e.g. '{"fajr": 2, "isha": -3}', from the environment."""
    raw = os.environ.get(name)
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        print(f"Warning: {name} is not valid JSON. Ignoring it.")
        return {}
    return value if isinstance(value, dict) else {}


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'a_default_fallback_secret_key_for_development_only'
    LOG_LEVEL = "INFO"

    # Sentry Configuration
    SENTRY_DSN = os.environ.get('SENTRY_DSN')

    # London Timetable Configuration
    LONDON_TIMEZONE = os.environ.get('LONDON_TIMEZONE') or "Europe/London"
    # Name of the bundled timetable in londontimes/data/
    LONDON_TIMES_RESOURCE = os.environ.get('LONDON_TIMES_RESOURCE') or "LondonPrayerTimes.json"
    # Load the bundled timetable at startup instead of on the first lookup
    LONDON_TIMES_PRELOAD = os.environ.get('LONDON_TIMES_PRELOAD', 'false').lower() in ('1', 'true', 'yes')
    # Signed minute deltas applied after conversion to UTC
    LONDON_TIMES_ADJUSTMENTS = _adjustments_from_env('LONDON_TIMES_ADJUSTMENTS')

class DevelopmentConfig(Config):
    FLASK_ENV = 'development'
    DEBUG = True
    LOG_LEVEL = "DEBUG"

class ProductionConfig(Config):
    FLASK_ENV = 'production'
    DEBUG = False
    LONDON_TIMES_PRELOAD = True

class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    LONDON_TIMES_PRELOAD = False
    LONDON_TIMES_ADJUSTMENTS = {}

config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
