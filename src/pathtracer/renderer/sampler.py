# pathtracer/renderer/sampler.py
"""
Scanline-parallel Monte-Carlo sampler.

Every scanline is an independent task with its own random stream derived
from one ``numpy.random.SeedSequence``, so an image depends only on the seed
and never on how many workers rendered it. Worker processes receive the
scene once through the pool initializer; the scene is read-only from then on.
"""
import logging
import os
import random
import time
from concurrent.futures import ProcessPoolExecutor
from typing import List, Optional

import numpy as np
from tqdm import tqdm

from pathtracer.camera.camera import Camera
from pathtracer.geometry.hittable import Hittable
from pathtracer.renderer.integrator import ray_color

logger = logging.getLogger(__name__)

# Scene installed in each worker process by _init_worker
_worker_scene = None


def default_workers() -> int:
    return os.cpu_count() or 1


def scanline_seeds(seed: Optional[int], height: int) -> List[int]:
    """One independent 64-bit seed per scanline."""
    children = np.random.SeedSequence(seed).spawn(height)
    return [int(child.generate_state(1, dtype=np.uint64)[0]) for child in children]


def _viewport_coordinate(index: int, jitter: float, size: int) -> float:
    if size == 1:
        return 0.5
    return (index + jitter) / (size - 1)


def render_scanline(world: Hittable, camera: Camera, j: int, width: int, height: int,
                    samples_per_pixel: int, max_depth: int, seed: int) -> np.ndarray:
    """
    Sample-averaged linear color of scanline ``j`` (counted from the bottom)
    as a (width, 3) array.
    """
    rng = random.Random(seed)
    row = np.zeros((width, 3), dtype=np.float64)
    for i in range(width):
        r = g = b = 0.0
        for _ in range(samples_per_pixel):
            s = _viewport_coordinate(i, rng.random(), width)
            t = _viewport_coordinate(j, rng.random(), height)
            color = ray_color(camera.get_ray(s, t, rng), world, max_depth, rng)
            r += color.x
            g += color.y
            b += color.z
        row[i] = (r / samples_per_pixel, g / samples_per_pixel, b / samples_per_pixel)
    return row


def _init_worker(world: Hittable, camera: Camera):
    global _worker_scene
    _worker_scene = (world, camera)


def _render_scanline_task(task):
    j, width, height, samples_per_pixel, max_depth, seed = task
    world, camera = _worker_scene
    return j, render_scanline(world, camera, j, width, height, samples_per_pixel, max_depth, seed)


def render(world: Hittable, camera: Camera, width: int, height: int,
           samples_per_pixel: int, max_depth: int, workers: int = 1,
           seed: Optional[int] = None, progress: bool = False) -> np.ndarray:
    """
    Render the scene into a (height, width, 3) float array of linear color,
    row 0 being the top of the image.

    Args:
        world: Scene root, typically a BVH. None renders the background only.
        camera: Camera producing a ray for every pixel sample.
        width, height: Image size in pixels.
        samples_per_pixel: Samples averaged into each pixel.
        max_depth: Maximum number of bounces per sample.
        workers: Worker processes; 1 renders in the calling process.
        seed: Seed for the per-scanline random streams (None for fresh entropy).
        progress: Show a progress bar over scanlines.
    """
    for name, value in (("width", width), ("height", height),
                        ("samples_per_pixel", samples_per_pixel), ("workers", workers)):
        if value < 1:
            raise ValueError(f"{name} must be at least 1, got {value}")

    seeds = scanline_seeds(seed, height)
    tasks = [(j, width, height, samples_per_pixel, max_depth, seeds[j]) for j in range(height)]
    image = np.zeros((height, width, 3), dtype=np.float64)

    logger.info("Rendering %dx%d, %d spp, depth %d, %d worker(s)",
                width, height, samples_per_pixel, max_depth, workers)
    start = time.perf_counter()

    with tqdm(total=height, unit="line", disable=not progress) as bar:
        if workers == 1:
            for j, _, _, _, _, line_seed in tasks:
                image[height - 1 - j] = render_scanline(
                    world, camera, j, width, height, samples_per_pixel, max_depth, line_seed)
                bar.update(1)
        else:
            with ProcessPoolExecutor(max_workers=workers, initializer=_init_worker,
                                     initargs=(world, camera)) as executor:
                for j, row in executor.map(_render_scanline_task, tasks):
                    image[height - 1 - j] = row
                    bar.update(1)

    logger.info("Render finished in %.2fs", time.perf_counter() - start)
    return image
