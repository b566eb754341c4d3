"""The fixed manifest of directories, files and placeholder assets.

Paths are relative to the output root. Order matters: the generator walks
each list front to back and stops at the first failure.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScaffoldFile:
    """A template rendered to a fixed target path."""

    template: str
    target: str


DIRECTORIES: tuple[str, ...] = (
    "docs",
    "docs/getting-started",
    "docs/architecture",
    "docs/core-services",
    "docs/api-guidelines",
    "docs/api-reference",
    "docs/development-standards/languages",
    "docs/development-standards/frameworks",
    "docs/configuration",
    "docs/tutorials/beginner",
    "docs/tutorials/intermediate",
    "docs/tutorials/advanced",
    "docs/tutorials/examples",
    "docs/operations",
    "docs/reference",
    "docs/updates",
    "docs/platform-docs",
    "docs/assets/images",
    "docs/assets/diagrams",
    "docs/stylesheets",
    "docs/javascripts",
    "overrides",
    "includes",
    ".github/workflows",
)

FILES: tuple[ScaffoldFile, ...] = (
    ScaffoldFile("docs/index.md.j2", "docs/index.md"),
    ScaffoldFile("docs/getting-started/index.md.j2", "docs/getting-started/index.md"),
    ScaffoldFile("docs/architecture/index.md.j2", "docs/architecture/index.md"),
    ScaffoldFile("docs/getting-started/overview.md.j2", "docs/getting-started/overview.md"),
    ScaffoldFile("docs/license.md.j2", "docs/license.md"),
    ScaffoldFile("gitignore.j2", ".gitignore"),
    ScaffoldFile("github/secrets.example.j2", ".github/workflows/secrets.example"),
    ScaffoldFile("github/deploy.yml.j2", ".github/workflows/deploy.yml"),
    ScaffoldFile("CONTRIBUTING.md.j2", "CONTRIBUTING.md"),
    ScaffoldFile("CHANGELOG.md.j2", "CHANGELOG.md"),
    ScaffoldFile("includes/abbreviations.md.j2", "includes/abbreviations.md"),
    ScaffoldFile("mkdocs.yml.j2", "mkdocs.yml"),
    ScaffoldFile("requirements.txt.j2", "requirements.txt"),
)

PLACEHOLDERS: tuple[str, ...] = (
    "docs/assets/logo.png",
    "docs/assets/favicon.png",
    "docs/stylesheets/extra.css",
    "docs/javascripts/mathjax.js",
)

# Placeholders are touched right after this FILES target is written, before
# CONTRIBUTING.md and CHANGELOG.md.
PLACEHOLDERS_AFTER = ".github/workflows/deploy.yml"
