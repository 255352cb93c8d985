"""Shared fixtures for pugrest tests."""

import time

import pytest
import requests

from tests.helpers import FakeServer


@pytest.fixture
def server(monkeypatch):
    fake = FakeServer()
    monkeypatch.setattr(requests, "post", fake.post)
    monkeypatch.setattr(time, "sleep", lambda seconds: None)
    return fake
