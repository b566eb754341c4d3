"""docscaffold configuration.

Typed configuration for the scaffolder and the publisher. All settings use
Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables. The defaults reproduce the
TES⩓IoT developer guidelines site.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_COMMIT_MESSAGE = """\
Initial commit: TES⩓IoT Developer Guidelines Portal

- Complete MkDocs Material setup
- Getting Started documentation
- Platform architecture docs
- Security model documentation
- REST API reference
- Python development standards
- Tutorials and examples
- GitHub Actions for deployment
- Cross-repository sync automation

Built with MkDocs Material theme for professional documentation portal."""


class RepositoryConfig(BaseModel):
    """Where the documentation repository lives and how it is pushed."""

    owner: str = Field(default="tesaiot", min_length=1)
    name: str = Field(default="tesaiot-dev-guidelines", min_length=1)
    host: str = Field(default="github.com", min_length=1)
    branch: str = Field(default="main", min_length=1)
    remote: str = Field(default="origin", min_length=1)

    @property
    def slug(self) -> str:
        """``owner/name`` shorthand."""
        return f"{self.owner}/{self.name}"

    @property
    def url(self) -> str:
        """HTTPS browse URL of the repository."""
        return f"https://{self.host}/{self.slug}"

    @property
    def ssh_url(self) -> str:
        """SSH remote URL used for ``git remote add``."""
        return f"git@{self.host}:{self.slug}.git"

    @property
    def edit_uri(self) -> str:
        """MkDocs ``edit_uri`` for the default ``docs`` directory."""
        return self.edit_uri_for("docs")

    def edit_uri_for(self, docs_dir: str) -> str:
        """MkDocs ``edit_uri`` pointing at *docs_dir* on the configured branch."""
        return f"edit/{self.branch}/{docs_dir}/"


class SiteConfig(BaseModel):
    """Values substituted into the generated pages and ``mkdocs.yml``."""

    name: str = Field(default="TES⩓IoT Developer Guidelines", min_length=1)
    description: str = Field(
        default="Comprehensive development standards and best practices for TES⩓IoT Platform"
    )
    url: str = Field(default="https://docs.tesaiot.com")
    author: str = Field(default="TESA IoT Team")
    organization: str = Field(default="Thai Embedded Systems Association (TESA)")
    copyright_year: int = Field(default=2025, ge=1970)
    platform_name: str = Field(default="TES⩓IoT", min_length=1)
    platform_repo_url: str = Field(default="https://github.com/tesaiot/tesa-iot-platform")
    analytics_env: str = Field(
        default="GOOGLE_ANALYTICS_KEY",
        pattern=r"^[A-Za-z_][A-Za-z0-9_]*$",
        description="Environment variable MkDocs reads the analytics property from",
    )


class Config(BaseModel):
    """Global docscaffold configuration.

    Instances are created once by the CLI (from a JSON file or from the
    environment) and passed to ``SiteGenerator`` and ``RepoPublisher``.
    """

    site: SiteConfig = Field(default_factory=SiteConfig)
    repository: RepositoryConfig = Field(default_factory=RepositoryConfig)
    output_dir: Path = Field(default=Path("."))
    docs_dir: str = Field(default="docs", min_length=1)
    commit_message: str = Field(default=DEFAULT_COMMIT_MESSAGE, min_length=1)

    @field_validator("docs_dir")
    @classmethod
    def _docs_dir_inside_root(cls, value: str) -> str:
        """The docs directory must be a relative path below ``output_dir``."""
        path = PurePosixPath(value.replace("\\", "/"))
        if path.is_absolute() or PureWindowsPath(value).is_absolute():
            raise ValueError(f"docs_dir must be relative to output_dir, got {value!r}")
        if ".." in path.parts:
            raise ValueError(f"docs_dir must not leave output_dir, got {value!r}")
        normalised = path.as_posix()
        if normalised == ".":
            raise ValueError("docs_dir must name a subdirectory of output_dir")
        return normalised

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def docs_path(self) -> Path:
        """Directory holding the markdown sources."""
        return self.output_dir / self.docs_dir

    @property
    def mkdocs_path(self) -> Path:
        """Path to the generated ``mkdocs.yml``."""
        return self.output_dir / "mkdocs.yml"

    @property
    def git_dir(self) -> Path:
        """Path to the repository's ``.git`` directory."""
        return self.output_dir / ".git"

    @property
    def edit_uri(self) -> str:
        """MkDocs ``edit_uri`` following the configured ``docs_dir``."""
        return self.repository.edit_uri_for(self.docs_dir)

    def template_context(self) -> dict[str, Any]:
        """Build the Jinja2 context shared by every scaffold template."""
        return {
            "site": self.site,
            "repo": self.repository,
            "docs_dir": self.docs_dir,
            "edit_uri": self.edit_uri,
        }

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``<output_dir>/docscaffold.json``.

        Returns:
            The path where the file was written.
        """
        target = path or (self.output_dir / "docscaffold.json")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            DOCS_OUTPUT_DIR, DOCS_DIR, DOCS_COMMIT_MESSAGE,
            DOCS_SITE_NAME, DOCS_SITE_URL, DOCS_SITE_AUTHOR,
            DOCS_COPYRIGHT_YEAR, DOCS_ANALYTICS_ENV,
            DOCS_REPO_OWNER, DOCS_REPO_NAME, DOCS_REPO_HOST,
            DOCS_GIT_BRANCH, DOCS_GIT_REMOTE.
        """
        site_kwargs: dict[str, Any] = {}
        if os.environ.get("DOCS_SITE_NAME"):
            site_kwargs["name"] = os.environ["DOCS_SITE_NAME"]
        if os.environ.get("DOCS_SITE_URL"):
            site_kwargs["url"] = os.environ["DOCS_SITE_URL"]
        if os.environ.get("DOCS_SITE_AUTHOR"):
            site_kwargs["author"] = os.environ["DOCS_SITE_AUTHOR"]
        if os.environ.get("DOCS_COPYRIGHT_YEAR"):
            site_kwargs["copyright_year"] = os.environ["DOCS_COPYRIGHT_YEAR"]
        if os.environ.get("DOCS_ANALYTICS_ENV"):
            site_kwargs["analytics_env"] = os.environ["DOCS_ANALYTICS_ENV"]

        repo_kwargs: dict[str, Any] = {}
        if os.environ.get("DOCS_REPO_OWNER"):
            repo_kwargs["owner"] = os.environ["DOCS_REPO_OWNER"]
        if os.environ.get("DOCS_REPO_NAME"):
            repo_kwargs["name"] = os.environ["DOCS_REPO_NAME"]
        if os.environ.get("DOCS_REPO_HOST"):
            repo_kwargs["host"] = os.environ["DOCS_REPO_HOST"]
        if os.environ.get("DOCS_GIT_BRANCH"):
            repo_kwargs["branch"] = os.environ["DOCS_GIT_BRANCH"]
        if os.environ.get("DOCS_GIT_REMOTE"):
            repo_kwargs["remote"] = os.environ["DOCS_GIT_REMOTE"]

        kwargs: dict[str, Any] = {
            "output_dir": Path(os.environ.get("DOCS_OUTPUT_DIR", ".")),
            "site": SiteConfig(**site_kwargs),
            "repository": RepositoryConfig(**repo_kwargs),
        }
        if os.environ.get("DOCS_DIR"):
            kwargs["docs_dir"] = os.environ["DOCS_DIR"]
        if os.environ.get("DOCS_COMMIT_MESSAGE"):
            kwargs["commit_message"] = os.environ["DOCS_COMMIT_MESSAGE"]

        return cls(**kwargs)
