"""
Allow running the package directly: python -m stripzoom
"""

import logging
from argparse import ArgumentParser

from .app import run
from .colormaps import list_colormap_names
from .config import RenderConfig


def build_parser():
    parser = ArgumentParser(
        prog='stripzoom',
        description='Continuously zooming Mandelbrot viewer rendered in parallel strips.'
    )
    parser.add_argument('--width', type=int,
                        help='window width in pixels (default 1280)')
    parser.add_argument('--height', type=int,
                        help='window height in pixels (default 640)')
    parser.add_argument('--fullscreen', action='store_true',
                        help='use the whole desktop')
    parser.add_argument('--max-n', type=int,
                        help='maximum iteration count (default 50)')
    parser.add_argument('--max-radius', type=float,
                        help='escape radius (default 50.0)')
    parser.add_argument('--areas', type=int,
                        help='number of strips rendered in parallel (default: CPU count)')
    parser.add_argument('--speed', type=float,
                        help='initial autoscroll speed per millisecond (default 0.0001)')
    parser.add_argument('--colormap', choices=list_colormap_names(),
                        help='palette name (default Classic)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='log start-up and shutdown details')
    return parser


def config_from_args(args):
    """Build a RenderConfig from parsed arguments."""
    return RenderConfig().with_overrides(
        max_n=args.max_n,
        max_radius=args.max_radius,
        areas=args.areas,
        speed=args.speed,
        colormap=args.colormap,
    )


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s',
    )

    run(config_from_args(args), args.width, args.height, args.fullscreen)


if __name__ == '__main__':
    main()
