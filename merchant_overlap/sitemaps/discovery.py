"""
Filesystem discovery of sitemap files and competitor sources.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from merchant_overlap.domain.sitemap import ParsedSitemap
from merchant_overlap.logging_utils import log_event
from merchant_overlap.sitemaps.parser import parse_sitemap_file

logger = logging.getLogger(__name__)

SITEMAP_SUFFIX = ".xml"


@dataclass(frozen=True)
class CompetitorSource:
    """
    One named competitor and the sitemap files that describe it.

    `grouped` marks sources built from a subdirectory rather than one flat file.
    """

    name: str
    path: Path
    files: tuple[Path, ...]
    grouped: bool = False


def find_sitemap_files(directory: str | Path) -> list[Path]:
    """
    Recursively list `*.xml` files under `directory`, sorted by path.
    Hidden files and directories are skipped.
    """

    root = Path(directory)
    if not root.is_dir():
        raise FileNotFoundError(f"Sitemap directory not found: {root}")
    return sorted(
        path
        for path in root.rglob(f"*{SITEMAP_SUFFIX}")
        if path.is_file()
        and not any(part.startswith(".") for part in path.relative_to(root).parts)
    )


def parse_sitemap_directory(
    directory: str | Path,
    *,
    max_workers: int = 4,
) -> list[ParsedSitemap]:
    """
    Parse every sitemap under `directory`. Unreadable files are logged and skipped.
    """

    return parse_sitemap_files(find_sitemap_files(directory), max_workers=max_workers)


def parse_sitemap_files(
    files: Sequence[Path],
    *,
    max_workers: int = 4,
) -> list[ParsedSitemap]:
    if not files:
        return []

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        results = list(executor.map(_parse_or_none, files))
    return [sitemap for sitemap in results if sitemap is not None]


def discover_competitor_sources(competitors_dir: str | Path) -> list[CompetitorSource]:
    """
    Flat `*.xml` files are labelled by stem; subdirectories by directory name.
    Hidden entries are ignored.
    """

    root = Path(competitors_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"Competitors directory not found: {root}")

    entries = sorted(item for item in root.iterdir() if not item.name.startswith("."))
    sources: list[CompetitorSource] = [
        CompetitorSource(name=item.stem, path=item, files=(item,))
        for item in entries
        if item.is_file() and item.suffix == SITEMAP_SUFFIX
    ]
    for item in entries:
        if not item.is_dir():
            continue
        sources.append(
            CompetitorSource(
                name=item.name,
                path=item,
                files=tuple(find_sitemap_files(item)),
                grouped=True,
            )
        )
    return sources


def competitor_base_name(label: str) -> str:
    """
    Collapse numbered sitemap parts (`shop-2`, `shop(1,2)`) onto one competitor name.
    """

    without_suffix = re.sub(r"-\d+$", "", label)
    collapsed = re.sub(r"[()\d+,]", "", without_suffix).rstrip("-_ ")
    return collapsed or label


def group_competitor_files(sources: list[CompetitorSource]) -> dict[str, list[Path]]:
    groups: dict[str, list[Path]] = {}
    for source in sources:
        groups.setdefault(competitor_base_name(source.name), []).extend(source.files)
    return groups


def _parse_or_none(path: Path) -> ParsedSitemap | None:
    try:
        return parse_sitemap_file(path)
    except OSError as exc:
        log_event(
            logger,
            logging.ERROR,
            "sitemap_read_failed",
            path=str(path),
            error=str(exc),
        )
        return None
