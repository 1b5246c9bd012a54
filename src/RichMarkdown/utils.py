from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    """Configure a simple console logger."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(message)s",
    )


def resolve_output_path(input_path: Path, output: Optional[str]) -> Path:
    if output:
        out_path = Path(output)
        if out_path.is_dir():
            out_path = out_path / f"{input_path.stem}.docx"
        return out_path
    return input_path.with_suffix(".docx")


def read_markdown(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def location_to_path(location: str | Path) -> Path:
    if isinstance(location, str) and location.startswith("file:"):
        return Path(url2pathname(urlparse(location).path))
    return Path(location).expanduser()


def load_text(location: str | Path) -> str | None:
    """Read a path or ``file:`` URL as UTF-8; None when it is unavailable."""
    path = location_to_path(location)
    try:
        return read_markdown(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read %s: %s", path, exc)
        return None
