# cli.py
import argparse
import logging
import sys
from typing import List, Optional

from raytracer.errors import RaytracerError
from raytracer.renderer.output import save_image, write_ppm
from raytracer.scene.loader import load_scene

logger = logging.getLogger("raytracer")


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="raytracer", description="Render a JSON scene to an image")
    parser.add_argument("scene", help="Path to the scene description (JSON)")
    parser.add_argument("-o", "--output", default=None,
                        help="Output image; .ppm is written as plain-text P3, other suffixes through Pillow. "
                             "Defaults to P3 on stdout")
    parser.add_argument("--workers", type=_positive_int, default=1,
                        help="Number of worker processes used to render rows")
    parser.add_argument("--seed", type=int, default=None, help="Override the scene's random seed")
    parser.add_argument("--samples", type=_positive_int, default=None,
                        help="Override samples per pixel")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log per-row progress")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        scene = load_scene(args.scene)
        if args.samples is not None:
            scene.camera.samples_per_pixel = args.samples
        image = scene.renderer(workers=args.workers, seed=args.seed).render_image()
    except RaytracerError as e:
        logger.error("%s", e)
        return 1

    if args.output is None:
        write_ppm(sys.stdout, image)
        sys.stdout.flush()
        return 0
    try:
        save_image(args.output, image)
    except (OSError, ValueError) as e:
        logger.error("Failed to write %s: %s", args.output, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
