# renderer/raytracer.py
import logging
import os
import time
from concurrent.futures import ProcessPoolExecutor
from typing import Optional, Sequence

import numpy as np

from raytracer.renderer.sampling import pixel_rng
from raytracer.renderer.tone_mapping import reinhard_tone_mapping

logger = logging.getLogger(__name__)

# Scene shipped to each worker process once, by the pool initializer.
_worker_state = {}


def _init_worker(camera, world, lights, seed):
    _worker_state["camera"] = camera
    _worker_state["world"] = world
    _worker_state["lights"] = lights
    _worker_state["seed"] = seed


def render_row(camera, world, lights: Sequence, seed: int, j: int) -> np.ndarray:
    """Mean linear radiance of every pixel on scanline j, shape (width, 3)."""
    row = np.zeros((camera.image_width, 3), dtype=np.float64)
    for i in range(camera.image_width):
        color = camera.render_pixel(i, j, world, lights, pixel_rng(seed, j, i))
        row[i] = color.to_tuple()
    return row


def _render_row_in_worker(j: int) -> np.ndarray:
    return render_row(_worker_state["camera"], _worker_state["world"],
                      _worker_state["lights"], _worker_state["seed"], j)


class Renderer:
    """
    Renders a scene scanline by scanline. Rows are independent, so with
    workers > 1 they are spread over a process pool; the result does not
    depend on the number of workers.
    """
    def __init__(self, camera, world, lights: Sequence, workers: Optional[int] = 1, seed: int = 0):
        self.camera = camera
        self.world = world
        self.lights = list(lights)
        self.workers = workers if workers is not None else (os.cpu_count() or 1)
        self.seed = seed
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

    def render(self) -> np.ndarray:
        """Linear radiance image, shape (height, width, 3)."""
        self.camera.update_camera()
        width, height = self.camera.image_width, self.camera.image_height
        image = np.zeros((height, width, 3), dtype=np.float64)

        logger.info("Rendering %dx%d, mode=%s, %d spp, %d bounces, %d worker(s)",
                    width, height, self.camera.render_mode.value, self.camera.samples_per_pixel,
                    self.camera.nbounces, self.workers)
        start = time.perf_counter()

        rows = range(height)
        if self.workers == 1:
            for j in rows:
                image[j] = render_row(self.camera, self.world, self.lights, self.seed, j)
                logger.debug("Scanlines remaining: %d", height - j - 1)
        else:
            chunksize = max(1, height // (self.workers * 8))
            with ProcessPoolExecutor(max_workers=self.workers, initializer=_init_worker,
                                     initargs=(self.camera, self.world, self.lights, self.seed)) as pool:
                for j, row in zip(rows, pool.map(_render_row_in_worker, rows, chunksize=chunksize)):
                    image[j] = row
                    logger.debug("Scanlines remaining: %d", height - j - 1)

        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return image

    def render_image(self) -> np.ndarray:
        """Tone-mapped 8-bit image, shape (height, width, 3)."""
        return reinhard_tone_mapping(self.render(), self.camera.effective_exposure)
