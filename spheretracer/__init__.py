from spheretracer.common import HitPolicy, Light, Ray, Settings, Sphere, World
from spheretracer.ppm import BufferSizeError

__all__ = [
    "BufferSizeError",
    "HitPolicy",
    "Light",
    "Ray",
    "Settings",
    "Sphere",
    "World",
]
