# londontimes/extensions.py

from flask import current_app, has_app_context

from .services.helpers.constants import DEFAULT_RESOURCE_NAME
from .services.london_times.store import LondonTimesStore


class FlaskLondonTimes:
    """A wrapper class to provide a Flask-like interface for the timetable store."""
    def __init__(self, app=None):
        # Default store for code running outside any app.
        self.store = LondonTimesStore()
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Bind a fresh store to the app, configured from the app's config."""
        app_store = LondonTimesStore(app.config.get('LONDON_TIMES_RESOURCE', DEFAULT_RESOURCE_NAME))
        app.extensions['london_times'] = app_store
        if app.config.get('LONDON_TIMES_PRELOAD'):
            if not app_store.load_default():
                app.logger.warning("LONDON_TIMES_PRELOAD is set but the bundled timetable could not be loaded.")

    def __getattr__(self, name):
        """Proxy attribute access to the default store."""
        return getattr(self.store, name)


def get_store() -> LondonTimesStore:
    """Returns the store owned by the current app, or the default store outside an app."""
    if has_app_context():
        app_store = current_app.extensions.get('london_times')
        if app_store is not None:
            return app_store
    return london_times.store


# Timetable store extension
london_times = FlaskLondonTimes()
