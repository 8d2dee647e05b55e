import logging
import math
from typing import List, Tuple

import numba
import numpy as np
from numba import types

from spheretracer.app import App
from spheretracer.common import HitPolicy, World

logger = logging.getLogger(__name__)

Vec = Tuple[float, float, float]

# packed scene layout, one row per object
SPHERE_FIELDS = 7  # center x, y, z, radius, color r, g, b
LIGHT_FIELDS = 4  # direction x, y, z, intensity


def jit_auto_type():
    type_mapping = {
        int: types.int64,
        float: types.float64,
        bool: types.boolean,
        Vec: types.UniTuple(types.float64, 3),
        List[List[float]]: types.float64[:, :],
        List[List[List[int]]]: types.uint8[:, :, :],
    }

    def inner(fun):
        signature = tuple(
            type_mapping[annot]
            for what, annot in fun.__annotations__.items()
            if what != "return"
        )
        return numba.njit(signature)(fun)

    return inner


jit_function = jit_auto_type()


@jit_function
def add(vec1: Vec, vec2: Vec) -> Vec:
    return vec1[0] + vec2[0], vec1[1] + vec2[1], vec1[2] + vec2[2]


@jit_function
def sub(vec1: Vec, vec2: Vec) -> Vec:
    return vec1[0] - vec2[0], vec1[1] - vec2[1], vec1[2] - vec2[2]


@jit_function
def mul_scalar(vec: Vec, x: float) -> Vec:
    return vec[0] * x, vec[1] * x, vec[2] * x


@jit_function
def dot(vec1: Vec, vec2: Vec) -> float:
    return vec1[0] * vec2[0] + vec1[1] * vec2[1] + vec1[2] * vec2[2]


@jit_function
def normalize(vec: Vec) -> Vec:
    return mul_scalar(vec, 1.0 / math.sqrt(dot(vec, vec)))


@jit_function
def clip(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


@jit_function
def vec_clip(vec: Vec, low: float, high: float) -> Vec:
    return (
        clip(vec[0], low, high),
        clip(vec[1], low, high),
        clip(vec[2], low, high),
    )


@jit_function
def to_byte(value: float) -> int:
    if value != value:
        return 0
    return int(math.floor(min(max(value, 0.0), 1.0) * 255.0))


@jit_function
def intersect(center: Vec, radius: float, ray_origin: Vec, ray_dir: Vec) -> float:
    # math.inf marks a miss
    oc = sub(center, ray_origin)
    tca = dot(oc, ray_dir)
    if tca < 0.0:
        return math.inf

    r2 = radius * radius
    d2 = dot(oc, oc) - tca * tca
    if d2 > r2:
        return math.inf

    thc = math.sqrt(r2 - d2)
    t0 = tca - thc
    t1 = tca + thc

    if t0 < 0.0 and t1 < 0.0:
        return math.inf
    elif t0 < 0.0:
        return t1
    elif t1 < 0.0:
        return t0
    return min(t0, t1)


@jit_function
def sphere_center(spheres: List[List[float]], i: int) -> Vec:
    return spheres[i, 0], spheres[i, 1], spheres[i, 2]


@jit_function
def sphere_color(spheres: List[List[float]], i: int) -> Vec:
    return spheres[i, 4], spheres[i, 5], spheres[i, 6]


@jit_function
def is_in_shadow(spheres: List[List[float]], point: Vec, dir_to_light: Vec) -> bool:
    for i in range(spheres.shape[0]):
        if intersect(sphere_center(spheres, i), spheres[i, 3], point, dir_to_light) < math.inf:
            return True
    return False


@jit_function
def light_power(
    spheres: List[List[float]],
    lights: List[List[float]],
    point: Vec,
    normal: Vec,
    shadows: bool,
) -> float:
    power = 0.0
    for j in range(lights.shape[0]):
        dir_to_light = mul_scalar(normalize((lights[j, 0], lights[j, 1], lights[j, 2])), -1.0)

        contribution = lights[j, 3]
        if shadows and is_in_shadow(spheres, point, dir_to_light):
            contribution = 0.0

        power += max(dot(normal, dir_to_light), 0.0) * contribution
    return power


@jit_function
def shade(
    spheres: List[List[float]],
    lights: List[List[float]],
    i: int,
    ray_origin: Vec,
    ray_dir: Vec,
    distance: float,
    shadows: bool,
    clamp_colors: bool,
) -> Vec:
    point_of_intersection = add(ray_origin, mul_scalar(ray_dir, distance))
    normal = normalize(sub(point_of_intersection, sphere_center(spheres, i)))

    color = mul_scalar(
        sphere_color(spheres, i),
        light_power(spheres, lights, point_of_intersection, normal, shadows),
    )
    if clamp_colors:
        color = vec_clip(color, 0.0, 1.0)
    return color


@jit_function
def get_pixel_color(
    spheres: List[List[float]],
    lights: List[List[float]],
    ray_origin: Vec,
    ray_dir: Vec,
    shadows: bool,
    clamp_colors: bool,
    nearest: bool,
) -> Vec:
    color = (0.0, 0.0, 0.0)
    nearest_index = -1
    dist_to_nearest = math.inf

    for i in range(spheres.shape[0]):
        dist = intersect(sphere_center(spheres, i), spheres[i, 3], ray_origin, ray_dir)
        if dist == math.inf:
            continue
        if nearest:
            if dist < dist_to_nearest:
                dist_to_nearest = dist
                nearest_index = i
        else:
            color = shade(spheres, lights, i, ray_origin, ray_dir, dist, shadows, clamp_colors)

    if nearest and nearest_index >= 0:
        color = shade(
            spheres, lights, nearest_index, ray_origin, ray_dir, dist_to_nearest, shadows, clamp_colors
        )
    return color


@jit_function
def render_image(
    image: List[List[List[int]]],
    spheres: List[List[float]],
    lights: List[List[float]],
    camera_position: Vec,
    focal_distance: float,
    shadows: bool,
    clamp_colors: bool,
    nearest: bool,
):
    height, width, _ = image.shape
    aspect = width / height

    for y in range(height):
        ry = 1.0 - (y + 0.5) / height * 2.0
        for x in range(width):
            rx = ((x + 0.5) / width * 2.0 - 1.0) * aspect
            ray_dir = normalize((rx, ry, -focal_distance))

            color = get_pixel_color(
                spheres, lights, camera_position, ray_dir, shadows, clamp_colors, nearest
            )
            image[y, x, 0] = to_byte(color[0])
            image[y, x, 1] = to_byte(color[1])
            image[y, x, 2] = to_byte(color[2])


def to_tuple(array) -> Tuple[float, float, float]:
    return float(array[0]), float(array[1]), float(array[2])


def world_to_arrays(world: World) -> Tuple[np.ndarray, np.ndarray]:
    spheres = np.array(
        [(*s.center, s.radius, *s.color) for s in world.spheres],
        dtype=np.float64,
    ).reshape(-1, SPHERE_FIELDS)
    lights = np.array(
        [(*l.direction, l.intensity) for l in world.lights],
        dtype=np.float64,
    ).reshape(-1, LIGHT_FIELDS)

    logger.debug("Packed %d spheres and %d lights", spheres.shape[0], lights.shape[0])
    return spheres, lights


class JitApp(App):
    name = "jit"

    def run(self):
        spheres, lights = world_to_arrays(self.world)
        render_image(
            self.image,
            spheres,
            lights,
            to_tuple(self.settings.camera_position),
            float(self.settings.focal_distance),
            bool(self.settings.shadows),
            bool(self.settings.clamp_colors),
            self.settings.hit_policy is HitPolicy.NEAREST_HIT,
        )
