import math
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from spheretracer.common import Ray, Sphere
from spheretracer.vector import dot, normalize, sub


def intersect(sphere: Sphere, ray: Ray) -> Optional[float]:
    """Distance along ray to the nearest non-negative hit on sphere, or None.

    Rays whose direction points away from the sphere center (tca < 0) are
    rejected up front. This also rejects a ray that starts inside the sphere
    while the center lies behind its origin.
    """
    oc = sub(sphere.center, ray.origin)
    tca = dot(oc, ray.direction)
    if tca < 0:
        return None

    r2 = sphere.radius * sphere.radius
    d2 = dot(oc, oc) - tca * tca
    if d2 > r2:
        return None

    thc = math.sqrt(r2 - d2)
    t0 = tca - thc
    t1 = tca + thc

    if t0 < 0 and t1 < 0:
        return None
    elif t0 < 0:
        return t1
    elif t1 < 0:
        return t0
    return min(t0, t1)


def surface_normal(sphere: Sphere, hit_point: NDArray[np.float64]) -> NDArray[np.float64]:
    return normalize(sub(hit_point, sphere.center))
