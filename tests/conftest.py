"""
Shared fixtures for the color format server tests.
"""

import pytest
from fastapi.testclient import TestClient

from colorspace.models import RGBA
from config import ServerSettings
from main import create_app


@pytest.fixture
def orange():
    """Material deep orange, #ff5722."""
    return RGBA(r=255, g=87, b=34, a=1.0)


@pytest.fixture
def sample_colors():
    """Colors spread over hue, lightness and saturation."""
    return [
        RGBA(r=255, g=87, b=34),
        RGBA(r=18, g=52, b=86),
        RGBA(r=128, g=128, b=128),
        RGBA(r=200, g=150, b=50),
        RGBA(r=255, g=255, b=255),
        RGBA(r=0, g=0, b=0),
    ]


@pytest.fixture
def settings():
    return ServerSettings()


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))
