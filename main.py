import argparse
import logging

from spheretracer.common import HitPolicy, Settings
from spheretracer.logging_config import setup_logging

from spheretracer.cpu_rt import CpuApp

import matplotlib.pyplot as plt

logger = logging.getLogger("spheretracer.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a scene of spheres to a binary PPM image")
    backend = parser.add_mutually_exclusive_group()
    backend.add_argument("--cpu", action="store_true", help="Pure numpy reference renderer (default)")
    backend.add_argument("--jit", action="store_true", help="numba-compiled renderer")

    parser.add_argument("--width", type=int, default=800, help="Image width")
    parser.add_argument("--height", type=int, default=600, help="Image height")
    parser.add_argument("--no-shadows", action="store_true", help="Skip shadow rays")
    parser.add_argument("--no-clamp", action="store_true", help="Do not clamp colors before 8-bit conversion")
    parser.add_argument("--nearest", action="store_true", help="Shade the nearest hit instead of the last hit")
    parser.add_argument("--output", default="out.ppm", help="Output PPM path")
    parser.add_argument("--show", action="store_true", help="Display the result with matplotlib")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        settings = Settings(
            width=args.width,
            height=args.height,
            shadows=not args.no_shadows,
            clamp_colors=not args.no_clamp,
            hit_policy=HitPolicy.NEAREST_HIT if args.nearest else HitPolicy.LAST_HIT,
        )
    except ValueError as e:
        parser.error(str(e))

    if args.jit:
        # importing compiles the kernels
        from spheretracer.jit_rt import JitApp

        app = JitApp(settings)
    else:
        app = CpuApp(settings)

    logger.info("Using %s backend", app.name)
    app.render()
    path = app.save(args.output)
    logger.info("Image saved to %s", path)

    if args.show:
        plt.imshow(app.image)
        plt.show(block=True)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
