#!/usr/bin/env python3
# Bundle Cargo.toml and src/**/*.rs next to this script into out.rs.
import sys

from src_bundle.cli import main

if __name__ == "__main__":
    sys.exit(main(script_path=__file__))
