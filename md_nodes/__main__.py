"""Generate the component documentation bundle.

Usage:
    python -m md_nodes [--components-dir DIR] [--output FILE] [component_id ...]
"""

import argparse
import logging
from pathlib import Path
import sys

from md_nodes.docs import load_component_docs, write_docs_bundle
from md_nodes.settings import Settings

LOGGER = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='md_nodes', description='Render component README files into a display-node bundle'
    )
    parser.add_argument(
        '--components-dir',
        type=Path,
        default=settings.components_dir,
        help='Directory with one <component_id>/README.md per component',
    )
    parser.add_argument(
        '--output', type=Path, default=settings.output_file, help='Bundle file to write'
    )
    parser.add_argument(
        'component_ids',
        nargs='*',
        default=settings.component_ids,
        help='Component ids to render (default: all configured)',
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    settings = Settings()
    logging.basicConfig(level=getattr(logging, settings.logging_level), stream=sys.stdout)

    args: argparse.Namespace = build_parser(settings).parse_args(argv)
    if not args.components_dir.is_dir():
        LOGGER.error('Components directory does not exist: %s', args.components_dir)
        return 1

    docs = load_component_docs(args.components_dir, args.component_ids)
    try:
        write_docs_bundle(docs, args.output)
    except OSError as e:
        LOGGER.exception('Failed to write %s: %s', args.output, e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
