# backend/tests/test_extensions.py

from flask import Flask

from londontimes.extensions import FlaskLondonTimes, get_store, london_times


def test_get_store_outside_app_returns_default_store(app):
    assert get_store() is london_times.store

def test_app_store_is_separate_from_default_store(app):
    with app.app_context():
        app_store = get_store()

    assert app_store is app.extensions['london_times']
    assert app_store is not london_times.store

def test_init_app_keeps_default_store(app):
    extension = FlaskLondonTimes()
    default_store = extension.store

    extension.init_app(Flask(__name__))

    assert extension.store is default_store

def test_extension_proxies_default_store(sample_json):
    extension = FlaskLondonTimes()
    extension.load(sample_json)

    assert extension.source == "text"
    assert extension.store.source == "text"
