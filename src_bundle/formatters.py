import logging
from typing import Iterator

from src_bundle.data_models import Bundle

logger = logging.getLogger(__name__)


def header_line(marker: str, path: str) -> str:
    return f"{marker} {path}\n"


def comment_lines(text: str, marker: str) -> str:
    """
    Prefix every line of ``text`` with ``marker`` and a single space.

    Lines are split on ``\\n`` only, so carriage returns and other separators
    stay part of the line content. An empty text has zero lines and yields
    an empty string. The last line is always newline-terminated in the result.
    """
    if not text:
        return ""
    body = text[:-1] if text.endswith("\n") else text
    return "".join(f"{marker} {line}\n" for line in body.split("\n"))


def iter_chunks(bundle: Bundle, marker: str) -> Iterator[str]:
    yield header_line(marker, bundle.manifest_path)
    yield comment_lines(bundle.manifest_text, marker)
    for entry in bundle.sources:
        yield "\n"
        yield header_line(marker, entry.path)
        yield entry.content


def render_bundle(bundle: Bundle, marker: str) -> str:
    rendered = "".join(iter_chunks(bundle, marker))
    logger.debug(f"Rendered bundle: {len(bundle.sources)} sections, {len(rendered)} characters")
    return rendered
