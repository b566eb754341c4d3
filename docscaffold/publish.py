"""Git initialisation and push for a scaffolded documentation repository.

Turns the output directory into a git repository with an initial commit and
a configured remote, ready for ``git push``. Every step is safe to re-run:
an existing repository, a clean worktree or an existing remote is detected
and the step is skipped or updated in place.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path

from rich.panel import Panel

from .config import Config
from .templates import TemplateRenderer
from .utils import console, run_command


class PublishError(Exception):
    """Raised when a publish step or git command fails."""

    def __init__(self, message: str, command: str = "", stderr: str = ""):
        self.command = command
        self.stderr = stderr
        super().__init__(message)


@dataclass
class PublishStep:
    """Outcome of one publish step."""

    name: str
    status: str
    detail: str = ""


@dataclass
class PublishReport:
    """Ordered record of the steps ``prepare``/``push`` performed."""

    root: Path
    steps: list[PublishStep] = field(default_factory=list)

    def add(self, name: str, status: str, detail: str = "") -> PublishStep:
        step = PublishStep(name=name, status=status, detail=detail)
        self.steps.append(step)
        return step

    def status_of(self, name: str) -> str | None:
        for step in self.steps:
            if step.name == name:
                return step.status
        return None


async def _run_git(*args: str, cwd: str | Path, timeout: int = 120) -> str:
    """Run a git command and return its stdout.

    Raises PublishError if the command exits with a non-zero code.
    """
    cmd = ["git", *args]
    cmd_str = " ".join(cmd)
    returncode, stdout, stderr = await run_command(cmd, cwd=cwd, timeout=timeout)
    if returncode != 0:
        raise PublishError(
            f"Git command failed (exit {returncode}): {cmd_str}\n{stderr}",
            command=cmd_str,
            stderr=stderr,
        )
    return stdout


class RepoPublisher:
    """Prepares and pushes the documentation repository at *root*."""

    def __init__(
        self,
        root: str | Path,
        config: Config,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.root = Path(root)
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    # -- Preconditions -----------------------------------------------------

    def check_prerequisites(self) -> None:
        """Fail fast when git is unavailable or *root* is not a scaffolded site."""
        if shutil.which("git") is None:
            raise PublishError("Git is not installed. Please install git first.")
        if not (self.root / "mkdocs.yml").is_file():
            raise PublishError(
                f"mkdocs.yml not found in {self.root}. "
                "Run 'docscaffold init' first or pass the site root."
            )

    # -- Public API --------------------------------------------------------

    async def prepare(self) -> PublishReport:
        """Initialise git, commit everything and configure the remote.

        Returns:
            A ``PublishReport`` with one entry per step.

        Raises:
            PublishError: On a failed precondition or git command.
        """
        self.check_prerequisites()
        report = PublishReport(root=self.root)
        repo = self.config.repository

        if (self.root / ".git").exists():
            report.add("init", "skipped", "Git repository already initialized")
        else:
            await _run_git("init", "--initial-branch", repo.branch, cwd=self.root)
            report.add("init", "done", f"Initialized on branch {repo.branch}")
        console.print("[green]✓[/green] Git repository ready")

        await _run_git("add", ".", cwd=self.root)
        report.add("add", "done")
        console.print("[green]✓[/green] Files added")

        if await self._commit(self.config.commit_message):
            report.add("commit", "done", self.config.commit_message.splitlines()[0])
            console.print("[green]✓[/green] Initial commit created")
        else:
            report.add("commit", "skipped", "Nothing to commit")
            console.print("[yellow]Nothing to commit, working tree clean[/yellow]")

        remotes = (await _run_git("remote", cwd=self.root)).split()
        if repo.remote in remotes:
            await _run_git("remote", "set-url", repo.remote, repo.ssh_url, cwd=self.root)
            report.add("remote", "done", f"Updated {repo.remote} -> {repo.ssh_url}")
        else:
            await _run_git("remote", "add", repo.remote, repo.ssh_url, cwd=self.root)
            report.add("remote", "done", f"Added {repo.remote} -> {repo.ssh_url}")
        console.print("[green]✓[/green] Remote repository configured")

        gitignore = self.root / ".gitignore"
        if gitignore.exists():
            report.add("gitignore", "skipped", ".gitignore already present")
        else:
            self.renderer.render_to_file(
                "gitignore.j2", gitignore, self.config.template_context()
            )
            await _run_git("add", ".gitignore", cwd=self.root)
            await self._commit("Add .gitignore file")
            report.add("gitignore", "done", "Created .gitignore")
            console.print("[green]✓[/green] .gitignore created")

        console.print(
            Panel(
                "[green]Repository is ready to push![/green]\n"
                f"  Remote: {repo.ssh_url}\n"
                f"  Branch: {repo.branch}",
                title="Publish",
                border_style="green",
            )
        )
        return report

    async def push(self, report: PublishReport | None = None) -> PublishReport:
        """Push the configured branch and set its upstream."""
        report = report or PublishReport(root=self.root)
        repo = self.config.repository
        console.print(
            f"[cyan]Pushing[/cyan] [bold]{repo.branch}[/bold] to [green]{repo.remote}[/green]..."
        )
        await _run_git("push", "-u", repo.remote, repo.branch, cwd=self.root, timeout=300)
        report.add("push", "done", f"{repo.remote}/{repo.branch}")
        console.print(f"[green]✓[/green] Pushed to {repo.url}")
        return report

    # -- Internal helpers --------------------------------------------------

    async def _commit(self, message: str) -> bool:
        """Commit staged changes; return ``False`` when nothing is staged."""
        staged = await _run_git("diff", "--cached", "--name-only", cwd=self.root)
        if not staged:
            return False
        await _run_git("commit", "-m", message, cwd=self.root)
        return True


def publish_instructions(config: Config) -> list[str]:
    """Next steps printed after ``prepare`` when not pushing directly."""
    repo = config.repository
    return [
        f"Make sure the repository exists on GitHub ({repo.slug}). "
        "Do NOT initialize it with a README, .gitignore or license.",
        f"Make sure SSH access is configured: ssh -T git@{repo.host}",
        f"Push: git push -u {repo.remote} {repo.branch}",
        "Configure GitHub Pages: Settings -> Pages -> Source: GitHub Actions",
        "Add the DOCS_REPO_TOKEN secret to the main platform repository",
        "Optional: test locally first with 'pip install -r requirements.txt && mkdocs serve'",
    ]
