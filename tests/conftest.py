"""Shared pytest fixtures for the docscaffold test suite.

Provides reusable fixtures for:
- Configurations rooted in a temporary directory
- A fully scaffolded documentation site
- A git identity so real commits work in isolated environments
"""

from __future__ import annotations

from pathlib import Path

import pytest

from docscaffold.config import Config, RepositoryConfig, SiteConfig
from docscaffold.generator import SiteGenerator


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Empty directory the scaffold is written into."""
    root = tmp_path / "site"
    root.mkdir()
    return root


@pytest.fixture
def default_config(site_root: Path) -> Config:
    """Default (TES⩓IoT) configuration writing into ``site_root``."""
    return Config(output_dir=site_root)


@pytest.fixture
def custom_config(site_root: Path) -> Config:
    """A configuration with every substitutable value changed."""
    return Config(
        output_dir=site_root,
        site=SiteConfig(
            name="Acme Handbook",
            description="Everything about Acme",
            url="https://handbook.acme.test",
            author="Acme Docs",
            organization="Acme Corp",
            copyright_year=2031,
            platform_name="Acme",
            platform_repo_url="https://github.com/acme/platform",
            analytics_env="ACME_ANALYTICS",
        ),
        repository=RepositoryConfig(owner="acme", name="handbook", branch="trunk"),
    )


# ---------------------------------------------------------------------------
# Scaffolded sites
# ---------------------------------------------------------------------------

@pytest.fixture
def scaffolded_site(default_config: Config) -> Path:
    """A site root populated by a quiet default scaffold run."""
    SiteGenerator(default_config, quiet=True).generate()
    return default_config.output_dir


# ---------------------------------------------------------------------------
# Git
# ---------------------------------------------------------------------------

@pytest.fixture
def git_identity(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Give git an identity and an empty global config for real commits."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(home / ".gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Docs Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "docs@test.local")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Docs Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "docs@test.local")
