import argparse
import logging
import os
import sys
from typing import List, Optional

from src_bundle.bundler import SourceBundler, resolve_base_dir
from src_bundle.data_models import (
    DEFAULT_COMMENT_MARKER,
    DEFAULT_EXTENSION,
    DEFAULT_MANIFEST,
    DEFAULT_OUTPUT,
    DEFAULT_SOURCE_DIR,
    BundleSettings,
)
from src_bundle.errors import BundleError

logger = logging.getLogger(__name__)


def _non_empty(value: str) -> str:
    if not value:
        raise argparse.ArgumentTypeError("must not be empty")
    return value


def _extension(value: str) -> str:
    value = _non_empty(value)
    return value if value.startswith(".") else f".{value}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="src-bundle",
        description="Concatenate a project manifest and its source files into one file."
    )
    parser.add_argument("--base-dir", help="Directory all other paths are relative to.")
    parser.add_argument("--manifest", default=DEFAULT_MANIFEST,
                        help="Manifest file embedded as comments (default: %(default)s).")
    parser.add_argument("--source-dir", default=DEFAULT_SOURCE_DIR,
                        help="Directory searched recursively (default: %(default)s).")
    parser.add_argument("--extension", type=_extension, default=DEFAULT_EXTENSION,
                        help="Suffix of the files to include (default: %(default)s).")
    parser.add_argument("--output", default=DEFAULT_OUTPUT,
                        help="File to create or overwrite (default: %(default)s).")
    parser.add_argument("--comment-marker", type=_non_empty, default=DEFAULT_COMMENT_MARKER,
                        help="Line comment marker used for headers (default: %(default)s).")
    parser.add_argument("--include-hidden", action="store_true",
                        help="Also include files and directories whose names start with '.'.")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log every file read.")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors.")
    return parser


def settings_from_args(args: argparse.Namespace) -> BundleSettings:
    return BundleSettings(
        manifest=args.manifest,
        source_dir=args.source_dir,
        extension=args.extension,
        output=args.output,
        comment_marker=args.comment_marker,
        include_hidden=args.include_hidden
    )


def main(argv: Optional[List[str]] = None, script_path: Optional[str] = None) -> int:
    """
    Run one bundling pass and return the process exit code.

    The base directory is ``--base-dir`` when given, otherwise the directory
    of ``script_path``, otherwise the current directory.
    """
    args = build_parser().parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    anchor = args.base_dir or script_path or os.getcwd()
    try:
        base_dir = resolve_base_dir(anchor)
        SourceBundler(base_dir, settings_from_args(args)).write()
    except BundleError as e:
        logger.error("%s", e)
        return e.exit_code
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
