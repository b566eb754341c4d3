"""Main scaffolding orchestrator.

Takes a ``Config`` and writes the documentation repository skeleton: the
directory tree, the bootstrap pages, the MkDocs configuration, repository
housekeeping files and empty placeholder assets.

The run is sequential and stops at the first failing filesystem operation.
Placeholders are touched between the workflow files and the repository guides.
Whatever was written before the failure stays on disk.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .config import Config
from .layout import DIRECTORIES, FILES, PLACEHOLDERS, PLACEHOLDERS_AFTER, ScaffoldFile
from .templates import TemplateRenderer
from .utils import console, ensure_dir, touch


@dataclass
class ScaffoldResult:
    """Everything a scaffold run created, in creation order."""

    root: Path
    directories: list[Path] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)
    placeholders: list[Path] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.directories) + len(self.files) + len(self.placeholders)


class ScaffoldError(Exception):
    """Raised when a filesystem operation fails during scaffolding.

    ``result`` holds what had been created before the failure; nothing is
    rolled back.
    """

    def __init__(
        self,
        message: str,
        path: Path,
        operation: str,
        result: ScaffoldResult,
    ) -> None:
        self.path = path
        self.operation = operation
        self.result = result
        super().__init__(message)


def _placeholder_index() -> int:
    """Index into ``FILES`` at which the placeholder assets are touched."""
    for index, entry in enumerate(FILES):
        if entry.target == PLACEHOLDERS_AFTER:
            return index + 1
    return len(FILES)


class SiteGenerator:
    """Writes the fixed documentation skeleton described in ``layout``."""

    def __init__(
        self,
        config: Config,
        renderer: TemplateRenderer | None = None,
        *,
        quiet: bool = False,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.quiet = quiet

    # -- Public API --------------------------------------------------------

    def generate(self, output_dir: str | Path | None = None) -> ScaffoldResult:
        """Generate the documentation skeleton.

        Args:
            output_dir: Root to scaffold into. Defaults to ``config.output_dir``.

        Returns:
            A ``ScaffoldResult`` listing every created path.

        Raises:
            ScaffoldError: On the first directory, file or placeholder that
                cannot be written.
        """
        root = Path(output_dir) if output_dir is not None else self.config.output_dir
        result = ScaffoldResult(root=root)
        context = self.config.template_context()

        self._echo(f"[cyan]Setting up[/cyan] [bold]{self.config.site.name}[/bold]...")

        self._echo("Creating documentation structure...")
        for directory in self._directories():
            self._create_directory(directory, root, result)

        split = _placeholder_index()

        self._echo("Creating pages and configuration...")
        for entry in FILES[:split]:
            self._write_file(root, entry, context, result)

        self._echo("Creating placeholder assets...")
        for placeholder in PLACEHOLDERS:
            self._touch_placeholder(self._relocate(placeholder), root, result)

        self._echo("Creating repository guides...")
        for entry in FILES[split:]:
            self._write_file(root, entry, context, result)

        return result

    # -- Steps -------------------------------------------------------------

    def _directories(self) -> list[str]:
        return [self._relocate(d) for d in DIRECTORIES]

    def _relocate(self, relative: str) -> str:
        """Map a manifest path under ``docs/`` onto the configured docs dir."""
        docs_dir = self.config.docs_dir
        if docs_dir == "docs":
            return relative
        if relative == "docs":
            return docs_dir
        if relative.startswith("docs/"):
            return f"{docs_dir}/{relative[len('docs/'):]}"
        return relative

    def _create_directory(self, relative: str, root: Path, result: ScaffoldResult) -> None:
        path = root / relative
        try:
            ensure_dir(path)
        except OSError as exc:
            raise ScaffoldError(
                f"Cannot create directory {path}: {exc}",
                path=path,
                operation="mkdir",
                result=result,
            ) from exc
        result.directories.append(path)
        self._echo(f"  [green]✓[/green] Created {relative}")

    def _write_file(
        self,
        root: Path,
        entry: ScaffoldFile,
        context: dict,
        result: ScaffoldResult,
    ) -> None:
        relative = self._relocate(entry.target)
        path = root / relative
        try:
            self.renderer.render_to_file(entry.template, path, context)
        except OSError as exc:
            raise ScaffoldError(
                f"Cannot write {path}: {exc}",
                path=path,
                operation="write",
                result=result,
            ) from exc
        result.files.append(path)
        self._echo(f"  [green]✓[/green] Wrote {relative}")

    def _touch_placeholder(self, relative: str, root: Path, result: ScaffoldResult) -> None:
        path = root / relative
        try:
            touch(path)
        except OSError as exc:
            raise ScaffoldError(
                f"Cannot create placeholder {path}: {exc}",
                path=path,
                operation="touch",
                result=result,
            ) from exc
        result.placeholders.append(path)

    def _echo(self, message: str) -> None:
        if not self.quiet:
            console.print(message)


def next_steps(config: Config) -> list[str]:
    """Follow-up instructions printed after a successful scaffold."""
    repo = config.repository
    return [
        f"Create a new GitHub repository: {repo.slug}",
        f"Initialize git and push this structure to {repo.ssh_url}: "
        "docscaffold publish --push",
        "Enable GitHub Pages in repository settings",
        "Add required secrets (see .github/workflows/secrets.example)",
        f"The documentation will auto-deploy on push to {repo.branch}",
    ]
