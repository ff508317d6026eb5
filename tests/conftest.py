"""Shared fixtures for the feature builder test suite."""

import pytest

from vsfeature.config.settings import Settings, set_settings
from vsfeature.structures.camera import Camera
from vsfeature.structures.points import Point


@pytest.fixture(autouse=True)
def default_settings():
    """Every test starts from default settings."""
    settings = Settings()
    set_settings(settings)
    return settings


@pytest.fixture
def camera():
    """Distortion-free pinhole camera (640x480)."""
    return Camera.from_params(600.0, 580.0, 320.0, 240.0)


@pytest.fixture
def distorted_camera():
    """Camera with mild radial and tangential distortion."""
    return Camera.from_params(
        600.0, 580.0, 320.0, 240.0,
        k1=-0.12, k2=0.03, p1=0.001, p2=-0.0005,
    )


@pytest.fixture
def singular_camera():
    """Camera whose intrinsic matrix cannot be inverted (fx = 0)."""
    return Camera.from_params(0.0, 580.0, 320.0, 240.0)


@pytest.fixture
def point():
    """3D point at Z = 2 m, consistent cP and p."""
    return Point(cP=[0.1, 0.2, 2.0, 1.0], p=[0.05, 0.1])
