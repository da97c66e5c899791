import logging
import os
import stat
import tempfile
from pathlib import Path, PurePosixPath
from typing import List, Optional, Union

from src_bundle.data_models import Bundle, BundleSettings, SourceEntry
from src_bundle.errors import BaseDirError, InputReadError, OutputWriteError
from src_bundle.formatters import render_bundle

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

# Permission bits for an output file that did not exist before the run.
DEFAULT_OUTPUT_MODE = 0o644


def resolve_base_dir(anchor: PathLike) -> Path:
    # anchor is the running script (its parent is used) or a directory.
    try:
        path = Path(anchor).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise BaseDirError(anchor, f"cannot resolve base directory: {e}") from e
    if not path.is_dir():
        path = path.parent
    if not os.access(path, os.X_OK):
        raise BaseDirError(path, "base directory cannot be entered")
    logger.debug("Resolved base directory %s from %s", path, anchor)
    return path


def read_text(path: Path) -> str:
    # newline="" keeps line endings byte-for-byte.
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(path, f"cannot read input: {e}") from e


def _is_hidden(relative: Path) -> bool:
    return any(part.startswith(".") for part in relative.parts)


def enumerate_sources(
    base_dir: Path,
    settings: BundleSettings,
    exclude: Optional[Path] = None
) -> List[PurePosixPath]:
    """Matching paths under the source directory, relative to base_dir and sorted."""
    root = base_dir / settings.source_dir
    if not root.is_dir():
        logger.debug("Source directory %s does not exist, nothing to enumerate", root)
        return []

    excluded = exclude.resolve() if exclude is not None else None
    prefix = PurePosixPath(Path(settings.source_dir).as_posix())
    matches = []
    for path in root.rglob("*"):
        if not path.name.endswith(settings.extension):
            continue
        relative = path.relative_to(root)
        if not settings.include_hidden and _is_hidden(relative):
            logger.debug("Skipping hidden path %s", path)
            continue
        # Only directories are skipped; dangling symlinks fail in read_text.
        if path.is_dir():
            continue
        if excluded is not None and path.resolve() == excluded:
            logger.debug("Skipping output file %s", path)
            continue
        matches.append(prefix / relative.as_posix())

    matches.sort(key=str)
    logger.debug("Enumerated %d source files under %s", len(matches), root)
    return matches


def write_atomic(target: Path, text: str) -> None:
    try:
        mode = stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        mode = DEFAULT_OUTPUT_MODE
    except OSError as e:
        raise OutputWriteError(target, f"cannot inspect output: {e}") from e

    tmp_path = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)
        try:
            f = os.fdopen(fd, "w", encoding="utf-8", newline="")
        except Exception:
            os.close(fd)
            raise
        with f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, target)
    except OSError as e:
        if tmp_path is not None:
            try:
                tmp_path.unlink()
            except FileNotFoundError:
                pass
        raise OutputWriteError(target, f"cannot write output: {e}") from e
    logger.debug("Wrote %d characters to %s", len(text), target)


class SourceBundler:
    def __init__(self, base_dir: PathLike, settings: Optional[BundleSettings] = None):
        self.base_dir = Path(base_dir)
        self.settings = settings or BundleSettings()

    @property
    def manifest_path(self) -> Path:
        return self.base_dir / self.settings.manifest

    @property
    def output_path(self) -> Path:
        return self.base_dir / self.settings.output

    def collect_sources(self) -> List[PurePosixPath]:
        return enumerate_sources(self.base_dir, self.settings, exclude=self.output_path)

    def build(self) -> Bundle:
        """Read the manifest and every matched source. The first unreadable file aborts."""
        manifest_text = read_text(self.manifest_path)
        logger.debug("Read manifest %s (%d characters)", self.manifest_path, len(manifest_text))

        bundle = Bundle(
            manifest_path=Path(self.settings.manifest).as_posix(),
            manifest_text=manifest_text
        )
        for relative in self.collect_sources():
            content = read_text(self.base_dir / relative)
            logger.debug("Read %s (%d characters)", relative, len(content))
            bundle.sources.append(SourceEntry(path=str(relative), content=content))
        return bundle

    def render(self, bundle: Optional[Bundle] = None) -> str:
        if bundle is None:
            bundle = self.build()
        return render_bundle(bundle, self.settings.comment_marker)

    def write(self) -> Bundle:
        bundle = self.build()
        write_atomic(self.output_path, self.render(bundle))
        logger.info(
            "Bundled %s and %d source files into %s",
            bundle.manifest_path, len(bundle.sources), self.output_path
        )
        return bundle


def bundle_project(anchor: PathLike, settings: Optional[BundleSettings] = None) -> Bundle:
    return SourceBundler(resolve_base_dir(anchor), settings).write()
