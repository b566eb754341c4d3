"""Unit tests for Config and related Pydantic models (docscaffold.config).

Tests cover:
- RepositoryConfig defaults and derived URLs
- SiteConfig defaults and validation
- Config derived paths, template context, save/load, from_env
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from docscaffold.config import (
    DEFAULT_COMMIT_MESSAGE,
    Config,
    RepositoryConfig,
    SiteConfig,
)


# ---------------------------------------------------------------------------
# RepositoryConfig
# ---------------------------------------------------------------------------


class TestRepositoryConfig:
    @pytest.mark.unit
    def test_defaults(self):
        repo = RepositoryConfig()
        assert repo.owner == "tesaiot"
        assert repo.name == "tesaiot-dev-guidelines"
        assert repo.branch == "main"
        assert repo.remote == "origin"

    @pytest.mark.unit
    def test_derived_urls(self):
        repo = RepositoryConfig()
        assert repo.slug == "tesaiot/tesaiot-dev-guidelines"
        assert repo.url == "https://github.com/tesaiot/tesaiot-dev-guidelines"
        assert repo.ssh_url == "git@github.com:tesaiot/tesaiot-dev-guidelines.git"

    @pytest.mark.unit
    def test_edit_uri(self):
        assert RepositoryConfig().edit_uri == "edit/main/docs/"
        repo = RepositoryConfig(branch="trunk")
        assert repo.edit_uri == "edit/trunk/docs/"
        assert repo.edit_uri_for("content") == "edit/trunk/content/"

    @pytest.mark.unit
    def test_custom_host(self):
        repo = RepositoryConfig(owner="acme", name="docs", host="git.acme.test")
        assert repo.url == "https://git.acme.test/acme/docs"
        assert repo.ssh_url == "git@git.acme.test:acme/docs.git"

    @pytest.mark.unit
    def test_empty_owner_rejected(self):
        with pytest.raises(ValidationError):
            RepositoryConfig(owner="")


# ---------------------------------------------------------------------------
# SiteConfig
# ---------------------------------------------------------------------------


class TestSiteConfig:
    @pytest.mark.unit
    def test_defaults(self):
        site = SiteConfig()
        assert site.name == "TES⩓IoT Developer Guidelines"
        assert site.url == "https://docs.tesaiot.com"
        assert site.copyright_year == 2025
        assert site.analytics_env == "GOOGLE_ANALYTICS_KEY"

    @pytest.mark.unit
    def test_copyright_year_lower_bound(self):
        with pytest.raises(ValidationError):
            SiteConfig(copyright_year=1900)

    @pytest.mark.unit
    def test_analytics_env_must_be_identifier(self):
        with pytest.raises(ValidationError):
            SiteConfig(analytics_env="NOT A VAR")


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


class TestConfig:
    @pytest.mark.unit
    def test_defaults(self):
        config = Config()
        assert config.output_dir == Path(".")
        assert config.docs_dir == "docs"
        assert config.commit_message == DEFAULT_COMMIT_MESSAGE
        assert config.commit_message.splitlines()[0] == (
            "Initial commit: TES⩓IoT Developer Guidelines Portal"
        )

    @pytest.mark.unit
    def test_derived_paths(self, tmp_path: Path):
        config = Config(output_dir=tmp_path, docs_dir="content")
        assert config.docs_path == tmp_path / "content"
        assert config.mkdocs_path == tmp_path / "mkdocs.yml"
        assert config.git_dir == tmp_path / ".git"

    @pytest.mark.unit
    def test_edit_uri_follows_docs_dir(self):
        config = Config(docs_dir="content", repository=RepositoryConfig(branch="trunk"))
        assert config.edit_uri == "edit/trunk/content/"
        assert config.template_context()["edit_uri"] == "edit/trunk/content/"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "docs_dir", ["/abs/docs", "../outside", "docs/../../x", ".", "C:\\docs"]
    )
    def test_docs_dir_must_stay_inside_output_dir(self, docs_dir: str):
        with pytest.raises(ValidationError):
            Config(docs_dir=docs_dir)

    @pytest.mark.unit
    def test_docs_dir_is_normalised(self):
        assert Config(docs_dir="content/").docs_dir == "content"
        assert Config(docs_dir="./site/content").docs_dir == "site/content"

    @pytest.mark.unit
    def test_template_context(self):
        config = Config()
        ctx = config.template_context()
        assert ctx["site"] is config.site
        assert ctx["repo"] is config.repository
        assert ctx["docs_dir"] == "docs"

    @pytest.mark.unit
    def test_save_and_load(self, tmp_path: Path):
        config = Config(
            output_dir=tmp_path,
            site=SiteConfig(name="Saved Site"),
            repository=RepositoryConfig(owner="someone"),
        )
        path = config.save()
        assert path == tmp_path / "docscaffold.json"
        loaded = Config.load(path)
        assert loaded.site.name == "Saved Site"
        assert loaded.repository.owner == "someone"
        assert loaded.output_dir == tmp_path

    @pytest.mark.unit
    def test_save_custom_path_creates_parents(self, tmp_path: Path):
        target = tmp_path / "nested" / "cfg.json"
        assert Config().save(target) == target
        assert target.exists()

    @pytest.mark.unit
    def test_from_env_defaults(self, monkeypatch: pytest.MonkeyPatch):
        for name in (
            "DOCS_OUTPUT_DIR", "DOCS_DIR", "DOCS_COMMIT_MESSAGE", "DOCS_SITE_NAME",
            "DOCS_SITE_URL", "DOCS_SITE_AUTHOR", "DOCS_COPYRIGHT_YEAR",
            "DOCS_ANALYTICS_ENV", "DOCS_REPO_OWNER", "DOCS_REPO_NAME",
            "DOCS_REPO_HOST", "DOCS_GIT_BRANCH", "DOCS_GIT_REMOTE",
        ):
            monkeypatch.delenv(name, raising=False)
        config = Config.from_env()
        assert config == Config()

    @pytest.mark.unit
    def test_from_env_overrides(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DOCS_OUTPUT_DIR", "/tmp/out")
        monkeypatch.setenv("DOCS_DIR", "content")
        monkeypatch.setenv("DOCS_SITE_NAME", "Env Site")
        monkeypatch.setenv("DOCS_COPYRIGHT_YEAR", "2030")
        monkeypatch.setenv("DOCS_REPO_OWNER", "env-owner")
        monkeypatch.setenv("DOCS_GIT_BRANCH", "develop")
        config = Config.from_env()
        assert config.output_dir == Path("/tmp/out")
        assert config.docs_dir == "content"
        assert config.site.name == "Env Site"
        assert config.site.copyright_year == 2030
        assert config.repository.owner == "env-owner"
        assert config.repository.branch == "develop"

    @pytest.mark.unit
    def test_from_env_invalid_year_is_validation_error(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DOCS_COPYRIGHT_YEAR", "abc")
        with pytest.raises(ValidationError):
            Config.from_env()
