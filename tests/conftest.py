"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add the project root to the path, main.py lives there
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from spheretracer.common import Light, Settings, Sphere, World  # noqa: E402


@pytest.fixture
def small_settings():
    return Settings(width=80, height=60)


@pytest.fixture
def red_sphere():
    return Sphere(center=[0.0, 0.0, -5.0], radius=1.0, color=[1.0, 0.0, 0.0])


@pytest.fixture
def front_light():
    # shines along -z, i.e. from behind the camera into the scene
    return Light(direction=[0.0, 0.0, -1.0], intensity=1.0)


@pytest.fixture
def single_sphere_world(red_sphere, front_light, small_settings):
    return World(spheres=(red_sphere,), lights=(front_light,), settings=small_settings)
