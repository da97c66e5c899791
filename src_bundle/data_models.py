from dataclasses import dataclass, field
from typing import List

# Defaults mirror the layout of a Rust crate.
DEFAULT_MANIFEST = "Cargo.toml"
DEFAULT_SOURCE_DIR = "src"
DEFAULT_EXTENSION = ".rs"
DEFAULT_OUTPUT = "out.rs"
DEFAULT_COMMENT_MARKER = "//"


# Everything a run needs besides the base directory. Paths are relative to it.
@dataclass(frozen=True)
class BundleSettings:
    manifest: str = DEFAULT_MANIFEST
    source_dir: str = DEFAULT_SOURCE_DIR
    extension: str = DEFAULT_EXTENSION
    output: str = DEFAULT_OUTPUT
    comment_marker: str = DEFAULT_COMMENT_MARKER
    include_hidden: bool = False


# path is POSIX-style and relative to the base directory, exactly as it appears in the header.
@dataclass
class SourceEntry:
    path: str
    content: str


@dataclass
class Bundle:
    manifest_path: str
    manifest_text: str
    sources: List[SourceEntry] = field(default_factory=list)
