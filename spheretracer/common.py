from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from spheretracer.vector import vec


class HitPolicy(Enum):
    # every sphere hit overwrites the pixel, the last one in scene order wins
    LAST_HIT = "last"
    # only the closest intersection along the ray is shaded
    NEAREST_HIT = "nearest"


@dataclass(frozen=True, eq=False)
class Settings:
    width: int = 800
    height: int = 600
    shadows: bool = True
    clamp_colors: bool = True
    hit_policy: HitPolicy = HitPolicy.LAST_HIT
    camera_position: NDArray[np.float64] = field(default_factory=lambda: vec([0.0, 0.0, 0.0]))
    focal_distance: float = 3.0

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.focal_distance <= 0:
            raise ValueError(f"Focal distance must be positive, got {self.focal_distance}")
        object.__setattr__(self, "camera_position", vec(self.camera_position))

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


@dataclass(frozen=True, eq=False)
class Sphere:
    center: NDArray[np.float64]
    radius: float
    color: NDArray[np.float64]

    def __post_init__(self):
        object.__setattr__(self, "center", vec(self.center))
        object.__setattr__(self, "color", vec(self.color))


@dataclass(frozen=True, eq=False)
class Light:
    # points from the light into the scene
    direction: NDArray[np.float64]
    intensity: float

    def __post_init__(self):
        object.__setattr__(self, "direction", vec(self.direction))


@dataclass(frozen=True, eq=False)
class Ray:
    origin: NDArray[np.float64]
    direction: NDArray[np.float64]


@dataclass(frozen=True, eq=False)
class World:
    spheres: Tuple[Sphere, ...]
    lights: Tuple[Light, ...] = ()
    settings: Settings = field(default_factory=Settings)

    def __post_init__(self):
        object.__setattr__(self, "spheres", tuple(self.spheres))
        object.__setattr__(self, "lights", tuple(self.lights))
