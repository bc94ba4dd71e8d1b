"""Pytest fixtures: an application built from isolated settings and a test client."""
import pytest
from fastapi.testclient import TestClient

from webseed.config import Settings
from webseed.main import AppBuilder
from webseed.state import AppState


@pytest.fixture()
def settings():
    return Settings.from_env({"ENV": "test", "COMPONENT": "seed-under-test", "VERSION": "9.9.9"})


@pytest.fixture()
def app_state():
    return AppState()


@pytest.fixture()
def builder(settings, app_state):
    return AppBuilder().with_settings(settings).with_state(app_state)


@pytest.fixture()
def application(builder):
    return builder.build()


@pytest.fixture()
def client(application):
    return TestClient(application.api)
