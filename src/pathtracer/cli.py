"""Command-line entry point: build a scene, render it and write the image.

Usage:
    pathtracer [options]
    python -m pathtracer [options]

Example:
    pathtracer --scene demo --width 320 --spp 16 --workers 4 --output demo.png
"""

import argparse
import logging
import random
import sys
from dataclasses import replace
from typing import List, Optional

from pathtracer.config import RenderConfig, load_config
from pathtracer.logging_config import setup_logging
from pathtracer.renderer.image_io import save_image
from pathtracer.renderer.sampler import default_workers, render
from pathtracer.renderer.tone_mapping import to_rgb8
from pathtracer.scenes import SCENES, build_scene

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Render a scene with the Monte-Carlo path tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", type=str, help="JSON file with render settings")
    parser.add_argument("--scene", choices=sorted(SCENES), help="Built-in scene (default: demo)")
    parser.add_argument("--obj", type=str, help="Render this OBJ mesh instead of a built-in scene")
    parser.add_argument("--width", type=int, help="Image width in pixels (default: 400)")
    parser.add_argument("--spp", type=int, dest="samples_per_pixel",
                        help="Samples per pixel (default: 25)")
    parser.add_argument("--depth", type=int, dest="max_depth",
                        help="Maximum bounces per sample (default: 50)")
    parser.add_argument("--workers", type=int, help="Worker processes (default: CPU count)")
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible image")
    parser.add_argument("--output", type=str, help="Output .png or .ppm (default: render.png)")
    parser.add_argument("--log-level", type=str, default="INFO", help="Log level (default: INFO)")
    parser.add_argument("--quiet", action="store_true", help="Suppress the progress bar")
    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> RenderConfig:
    """Config file values, overridden by any flags given on the command line."""
    config = load_config(args.config) if args.config else RenderConfig()
    overrides = {
        name: getattr(args, name)
        for name in ("scene", "obj", "width", "samples_per_pixel", "max_depth",
                     "workers", "seed", "output")
        if getattr(args, name) is not None
    }
    config = replace(config, **overrides)
    config.validate()
    return config


def run(config: RenderConfig, progress: bool = True) -> None:
    scene_rng = random.Random(config.seed)
    world = build_scene(config.scene, scene_rng, config.obj)
    time0, time1 = config.camera.time0, config.camera.time1
    bvh = world.build_bvh(time0, time1)
    camera = config.camera.build(config.aspect_ratio)

    image = render(bvh, camera, config.width, config.height,
                   config.samples_per_pixel, config.max_depth,
                   workers=config.workers or default_workers(),
                   seed=config.seed, progress=progress)
    save_image(config.output, to_rgb8(image))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.log_level)
    try:
        config = resolve_config(args)
        run(config, progress=not args.quiet)
    except (ValueError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
