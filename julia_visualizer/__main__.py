"""
Allow running the package directly: python -m julia_visualizer
"""

import logging
from argparse import ArgumentParser

from .config import load_settings


def build_parser():
    parser = ArgumentParser(prog='julia_visualizer',
                            description='Interactive Julia set explorer.')

    parser.add_argument('--config', type=str, dest='config', metavar='PATH',
                        help='settings JSON file (default: the bundled settings.json)')

    parser.add_argument('--width', type=int, dest='width', metavar='WIDTH',
                        help='initial window width in pixels')

    parser.add_argument('--height', type=int, dest='height', metavar='HEIGHT',
                        help='initial window height in pixels')

    parser.add_argument('--max-iter', type=int, dest='max_iter', metavar='MAX_ITER',
                        help='maximum number of iterations before a point counts as bounded')

    parser.add_argument('--supersample', type=int, dest='supersample', metavar='N',
                        help='samples per axis per pixel for anti-aliasing')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='enable debug logging, including per-frame timings')

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    settings = load_settings(args.config).with_overrides(
        width=args.width,
        height=args.height,
        max_iter=args.max_iter,
        supersample=args.supersample,
        log_level='DEBUG' if args.verbose else None,
    )
    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    # Imported late so --help works without initializing pygame
    from .app import run
    run(settings)


if __name__ == '__main__':
    main()
