"""Shared fixtures."""

import pytest

from tests.fakes import CONNAUGHT_PLACE, INDIA_GATE, FakeGeocoder


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder({"Connaught Place": CONNAUGHT_PLACE, "India Gate": INDIA_GATE})
