#!/usr/bin/env python3
import logging
import sys
from pathlib import Path

from src_bundle.bundler import SourceBundler, resolve_base_dir
from src_bundle.data_models import BundleSettings
from src_bundle.errors import BundleError


def main():
    # Configure logging
    logging.basicConfig(level=logging.DEBUG, stream=sys.stdout)
    logger = logging.getLogger(__name__)

    # Bundle a Python project instead of a Rust crate
    settings = BundleSettings(
        manifest="pyproject.toml",
        source_dir="src_bundle",
        extension=".py",
        output="combined_code.py",
        comment_marker="#"
    )

    try:
        bundler = SourceBundler(resolve_base_dir(Path(__file__).parent.parent), settings)
        bundle = bundler.build()
    except BundleError as e:
        logger.error("Could not collect sources: %s", e)
        return 1

    for entry in bundle.sources:
        logger.info("%s: %d lines", entry.path, entry.content.count("\n"))

    # Preview the header instead of writing the file
    preview = bundler.render(bundle).splitlines()[:5]
    logger.info("First lines of the bundle:\n%s", "\n".join(preview))
    return 0


if __name__ == "__main__":
    sys.exit(main())
