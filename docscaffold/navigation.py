"""Read back a scaffolded ``mkdocs.yml`` and check what it points at.

The navigation tree and the theme/asset entries reference files under the
docs directory. ``check_site`` reports the ones that do not exist yet, and
``probe_urls`` tests the external script and social links over HTTP.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx
import yaml

DEFAULT_DOCS_DIR = "docs"


class SiteConfigError(Exception):
    """Raised when ``mkdocs.yml`` is missing or cannot be parsed."""

    def __init__(self, message: str, path: Path) -> None:
        self.path = path
        super().__init__(message)


class _MkDocsLoader(yaml.SafeLoader):
    """YAML loader that tolerates MkDocs and Material tags."""


def _construct_python_name(loader: yaml.SafeLoader, suffix: str, node: yaml.Node) -> str:
    """Keep ``!!python/name:`` references as the dotted name they point at."""
    if isinstance(node, yaml.ScalarNode):
        value = loader.construct_scalar(node)
        return value or suffix
    return suffix


def _construct_env(loader: yaml.SafeLoader, node: yaml.Node) -> Any:
    """Resolve ``!ENV VAR`` or ``!ENV [VAR, ..., default]`` like MkDocs does.

    An unset variable with no default resolves to ``None``.
    """
    default = None
    if isinstance(node, yaml.ScalarNode):
        names = [loader.construct_scalar(node)]
    elif isinstance(node, yaml.SequenceNode):
        items = loader.construct_sequence(node)
        # Every item but the last is a variable name; the last is the default.
        if len(items) > 1:
            default = items[-1]
            items = items[:-1]
        names = items
    else:
        return None
    for name in map(str, names):
        if name in os.environ:
            return os.environ[name]
    return default


_MkDocsLoader.add_multi_constructor("tag:yaml.org,2002:python/name:", _construct_python_name)
_MkDocsLoader.add_constructor("!ENV", _construct_env)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NavPage:
    """One leaf of the navigation tree."""

    title: str | None
    path: str
    section: tuple[str, ...] = ()

    @property
    def external(self) -> bool:
        return self.path.startswith(("http://", "https://"))


@dataclass
class SiteReport:
    """Result of ``check_site``."""

    docs_dir: Path
    pages: list[NavPage] = field(default_factory=list)
    missing_pages: list[NavPage] = field(default_factory=list)
    missing_assets: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.missing_pages and not self.missing_assets


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_mkdocs_config(path: str | Path) -> dict[str, Any]:
    """Parse ``mkdocs.yml`` into a plain dict.

    Raises:
        SiteConfigError: If the file is missing, unreadable, not YAML, or not
            a mapping at the top level.
    """
    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SiteConfigError(f"Cannot read {config_path}: {exc}", config_path) from exc

    try:
        data = yaml.load(raw, Loader=_MkDocsLoader)
    except yaml.YAMLError as exc:
        raise SiteConfigError(f"Invalid YAML in {config_path}: {exc}", config_path) from exc

    if not isinstance(data, dict):
        raise SiteConfigError(f"{config_path} does not contain a mapping", config_path)
    return data


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


def iter_nav_pages(nav: Any, section: tuple[str, ...] = ()) -> Iterator[NavPage]:
    """Yield every page in an MkDocs ``nav`` tree, depth first.

    Entries are either bare paths (``- index.md``), titled pages
    (``- Overview: overview.md``) or titled sections holding a nested list.
    """
    if nav is None:
        return
    if isinstance(nav, str):
        yield NavPage(title=None, path=nav, section=section)
        return
    if isinstance(nav, list):
        for item in nav:
            yield from iter_nav_pages(item, section)
        return
    if isinstance(nav, dict):
        for title, value in nav.items():
            if isinstance(value, str):
                yield NavPage(title=str(title), path=value, section=section)
            else:
                yield from iter_nav_pages(value, section + (str(title),))


def _page_file(page: NavPage) -> str:
    """Strip any ``#anchor`` from a nav path."""
    return page.path.split("#", 1)[0]


def _local_assets(config: dict[str, Any]) -> list[str]:
    """Theme logo/favicon plus non-URL ``extra_css``/``extra_javascript`` entries."""
    assets: list[str] = []
    theme = config.get("theme") or {}
    if isinstance(theme, dict):
        for key in ("logo", "favicon"):
            value = theme.get(key)
            if isinstance(value, str) and value:
                assets.append(value)
    for key in ("extra_css", "extra_javascript"):
        for entry in config.get(key) or []:
            # MkDocs also accepts {path: ..., type: module} mappings here.
            value = entry.get("path") if isinstance(entry, dict) else entry
            if isinstance(value, str) and not value.startswith(("http://", "https://", "//")):
                assets.append(value)
    return assets


def check_site(root: str | Path) -> SiteReport:
    """Check that every nav page and local asset in ``<root>/mkdocs.yml`` exists."""
    root_path = Path(root)
    config = load_mkdocs_config(root_path / "mkdocs.yml")
    docs_dir = root_path / str(config.get("docs_dir") or DEFAULT_DOCS_DIR)

    report = SiteReport(docs_dir=docs_dir)
    for page in iter_nav_pages(config.get("nav")):
        report.pages.append(page)
        if page.external:
            continue
        if not (docs_dir / _page_file(page)).is_file():
            report.missing_pages.append(page)

    for asset in _local_assets(config):
        if not (docs_dir / asset).is_file():
            report.missing_assets.append(asset)

    return report


# ---------------------------------------------------------------------------
# External links
# ---------------------------------------------------------------------------


def external_urls(config: dict[str, Any]) -> list[str]:
    """Collect external script URLs and ``extra.social`` links, deduplicated."""
    urls: list[str] = []
    for entry in config.get("extra_javascript") or []:
        value = entry.get("path") if isinstance(entry, dict) else entry
        if isinstance(value, str) and value.startswith(("http://", "https://")):
            urls.append(value)
    extra = config.get("extra") or {}
    for social in extra.get("social") or []:
        link = social.get("link") if isinstance(social, dict) else None
        if isinstance(link, str) and link.startswith(("http://", "https://")):
            urls.append(link)
    return list(dict.fromkeys(urls))


async def probe_urls(
    urls: list[str],
    timeout: float = 10.0,
    client: httpx.AsyncClient | None = None,
) -> dict[str, bool]:
    """Check each URL concurrently.

    A URL is reachable when it answers with a status below 400. Connection
    errors and timeouts count as unreachable.

    Returns:
        Mapping of ``{url: reachable}`` in input order.
    """

    async def _probe(http: httpx.AsyncClient, url: str) -> bool:
        try:
            response = await http.get(url)
        except httpx.HTTPError:
            return False
        return response.status_code < 400

    if client is not None:
        results = await asyncio.gather(*(_probe(client, u) for u in urls))
        return dict(zip(urls, results))

    async with httpx.AsyncClient(
        timeout=httpx.Timeout(timeout, connect=5.0),
        follow_redirects=True,
    ) as http:
        results = await asyncio.gather(*(_probe(http, u) for u in urls))
    return dict(zip(urls, results))
