import logging
import time
from dataclasses import replace
from pathlib import Path
from typing import Optional

import numpy as np

from spheretracer.common import Light, Settings, Sphere, World
from spheretracer.ppm import write_ppm

logger = logging.getLogger(__name__)


class App:
    name = "base"

    def __init__(self, settings: Settings, world: Optional[World] = None):
        self.settings = settings

        self.image = np.zeros(
            (settings.height, settings.width, 3),
            dtype=np.uint8,
        )

        if world is None:
            world = self.create_world()
        elif world.settings is not settings:
            world = replace(world, settings=settings)
        self.world = world

    def run(self):
        raise NotImplementedError

    def render(self) -> np.ndarray:
        logger.info(
            "Rendering %dx%d with %s backend (%d spheres, %d lights, shadows=%s, policy=%s)",
            self.settings.width,
            self.settings.height,
            self.name,
            len(self.world.spheres),
            len(self.world.lights),
            self.settings.shadows,
            self.settings.hit_policy.value,
        )
        start = time.perf_counter()
        self.run()
        logger.info("Rendered in %.2fs", time.perf_counter() - start)
        return self.image

    def pixels(self) -> bytes:
        return self.image.tobytes()

    def save(self, path) -> Path:
        return write_ppm(path, self.settings.width, self.settings.height, self.image)

    def create_world(self) -> World:
        sphere_red = Sphere(
            center=[0.0, 0.0, -5.0],
            radius=1.0,
            color=[1.0, 0.0, 0.0],
        )
        sphere_blue = Sphere(
            center=[0.5, 0.1, -3.0],
            radius=0.1,
            color=[0.0, 0.0, 1.0],
        )
        sphere_green = Sphere(
            center=[-0.5, 0.1, -3.0],
            radius=0.1,
            color=[0.0, 1.0, 0.0],
        )
        sphere_white = Sphere(
            center=[0.0, 0.5, -3.0],
            radius=0.1,
            color=[1.0, 1.0, 1.0],
        )
        sphere_grey = Sphere(
            center=[0.0, -0.5, -3.0],
            radius=0.1,
            color=[0.3, 0.3, 0.3],
        )

        light_front = Light(direction=[0.0, 0.0, -4.0], intensity=0.1)
        light_above = Light(direction=[0.0, -0.5, -4.0], intensity=0.1)

        return World(
            spheres=(
                sphere_red,
                sphere_blue,
                sphere_green,
                sphere_white,
                sphere_grey,
            ),
            lights=(light_front, light_above),
            settings=self.settings,
        )
