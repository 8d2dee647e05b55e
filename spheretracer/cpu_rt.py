from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from spheretracer.app import App
from spheretracer.common import HitPolicy, Ray, Settings, Sphere, World
from spheretracer.geometry import intersect, surface_normal
from spheretracer.vector import add, clamp, dot, normalize, scale, to_byte_color, vec

BACKGROUND = np.zeros(3, dtype=np.uint8)


def primary_ray(settings: Settings, x: int, y: int) -> Ray:
    # pixel centers mapped to [-aspect, aspect] x [-1, 1], y pointing up
    rx = ((x + 0.5) / settings.width * 2.0 - 1.0) * settings.aspect_ratio
    ry = 1.0 - (y + 0.5) / settings.height * 2.0

    return Ray(
        origin=settings.camera_position,
        direction=normalize(vec([rx, ry, -settings.focal_distance])),
    )


def is_in_shadow(world: World, point: NDArray[np.float64], dir_to_light: NDArray[np.float64]) -> bool:
    # the sphere being shaded is tested as well
    shadow_ray = Ray(origin=point, direction=dir_to_light)
    for obj in world.spheres:
        if intersect(obj, shadow_ray) is not None:
            return True

    return False


def light_power(world: World, point: NDArray[np.float64], normal: NDArray[np.float64]) -> float:
    power = 0.0
    for light in world.lights:
        dir_to_light = scale(normalize(light.direction), -1.0)

        if world.settings.shadows and is_in_shadow(world, point, dir_to_light):
            contribution = 0.0
        else:
            contribution = light.intensity

        power += max(dot(normal, dir_to_light), 0.0) * contribution

    return power


def shade(world: World, sphere: Sphere, ray: Ray, distance: float) -> NDArray[np.uint8]:
    point_of_intersection = add(ray.origin, scale(ray.direction, distance))
    normal = surface_normal(sphere, point_of_intersection)

    color = scale(sphere.color, light_power(world, point_of_intersection, normal))
    if world.settings.clamp_colors:
        color = clamp(color, 0.0, 1.0)

    return to_byte_color(color)


def nearest_hit(world: World, ray: Ray) -> Optional[Tuple[Sphere, float]]:
    dist_to_nearest = float("inf")
    nearest: Optional[Sphere] = None
    for obj in world.spheres:
        dist = intersect(obj, ray)
        if dist is not None and dist < dist_to_nearest:
            dist_to_nearest = dist
            nearest = obj

    if nearest is None:
        return None
    return nearest, dist_to_nearest


def get_pixel_color(world: World, x: int, y: int) -> NDArray[np.uint8]:
    ray = primary_ray(world.settings, x, y)

    if world.settings.hit_policy is HitPolicy.NEAREST_HIT:
        hit = nearest_hit(world, ray)
        if hit is None:
            return BACKGROUND.copy()
        return shade(world, hit[0], ray, hit[1])

    # every hit sphere repaints the pixel, so the last one in scene order wins
    pixel = BACKGROUND.copy()
    for obj in world.spheres:
        dist = intersect(obj, ray)
        if dist is not None:
            pixel = shade(world, obj, ray, dist)

    return pixel


class CpuApp(App):
    name = "cpu"

    def run(self):
        for y in range(self.settings.height):
            for x in range(self.settings.width):
                self.image[y, x, :] = get_pixel_color(self.world, x, y)
