"""Command line entry point for docscaffold.

Usage::

    docscaffold init -o ./tesaiot-dev-guidelines
    docscaffold check -r ./tesaiot-dev-guidelines --external
    docscaffold publish -r ./tesaiot-dev-guidelines --push
    docscaffold config --save docscaffold.json
"""

from __future__ import annotations

import argparse
import asyncio
import time
from pathlib import Path

from pydantic import ValidationError
from rich.panel import Panel

from .config import Config
from .generator import ScaffoldError, SiteGenerator, next_steps
from .navigation import (
    SiteConfigError,
    check_site,
    external_urls,
    load_mkdocs_config,
    probe_urls,
)
from .publish import PublishError, RepoPublisher, publish_instructions
from .utils import (
    console,
    format_duration,
    print_error,
    print_steps,
    print_success,
    print_summary_table,
    print_warning,
)


def _load_config(path: str | None) -> Config:
    if path:
        return Config.load(Path(path))
    return Config.from_env()


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def cmd_init(args: argparse.Namespace) -> int:
    config = _load_config(args.config)
    if args.output:
        config = config.model_copy(update={"output_dir": Path(args.output)})

    start = time.monotonic()
    generator = SiteGenerator(config, quiet=args.quiet)
    try:
        result = generator.generate()
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        print_warning(
            f"Stopped after {exc.result.total} item(s); the partial tree was left in place."
        )
        return 1

    print_success("Documentation repository structure created!")
    print_summary_table(
        {
            "Root": str(result.root),
            "Directories": str(len(result.directories)),
            "Files": str(len(result.files)),
            "Placeholders": str(len(result.placeholders)),
            "Duration": format_duration(time.monotonic() - start),
        },
        title=config.site.name,
    )
    print_steps("Next Steps:", next_steps(config))
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    root = Path(args.root)
    try:
        report = check_site(root)
    except SiteConfigError as exc:
        print_error(f"Error: {exc}")
        return 1

    console.print(f"Checked {len(report.pages)} navigation page(s) under {report.docs_dir}")
    for page in report.missing_pages:
        location = " / ".join(page.section) or "(top level)"
        print_warning(f"  Missing page: {page.path} ({location})")
    for asset in report.missing_assets:
        print_warning(f"  Missing asset: {asset}")

    ok = report.ok
    if args.external:
        urls = external_urls(load_mkdocs_config(root / "mkdocs.yml"))
        reachable = asyncio.run(probe_urls(urls, timeout=args.timeout))
        for url, alive in reachable.items():
            if alive:
                console.print(f"  [green]✓[/green] {url}")
            else:
                print_warning(f"  Unreachable: {url}")
                ok = False

    if ok:
        print_success("Site configuration is consistent.")
        return 0
    print_error("Site configuration references missing or unreachable targets.")
    return 1


def cmd_publish(args: argparse.Namespace) -> int:
    config = _load_config(args.config)
    root = Path(args.root) if args.root else config.output_dir
    publisher = RepoPublisher(root, config)

    console.print(Panel(f"[bold]{config.site.name}[/bold] - Repository Setup", border_style="cyan"))

    async def _run() -> None:
        report = await publisher.prepare()
        if args.push:
            await publisher.push(report)

    try:
        asyncio.run(_run())
    except PublishError as exc:
        print_error(f"Error: {exc}")
        return 1

    if not args.push:
        print_steps("Next steps:", publish_instructions(config))
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    config = _load_config(args.config)
    if args.save:
        target = config.save(Path(args.save))
        print_success(f"Configuration saved to {target}")
        return 0
    console.print_json(config.model_dump_json())
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docscaffold",
        description="Scaffold, check and publish an MkDocs Material documentation repository",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  docscaffold init -o ./tesaiot-dev-guidelines\n"
            "  docscaffold check -r ./tesaiot-dev-guidelines --external\n"
            "  docscaffold publish -r ./tesaiot-dev-guidelines --push\n"
        ),
    )
    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help="Create the directory tree and bootstrap files")
    init.add_argument("--output", "-o", default=None, help="Output directory (default: config output_dir)")
    init.add_argument("--config", "-c", default=None, help="JSON configuration file")
    init.add_argument("--quiet", "-q", action="store_true", help="Only print the summary")
    init.set_defaults(func=cmd_init)

    check = sub.add_parser("check", help="Verify navigation pages and assets exist")
    check.add_argument("--root", "-r", default=".", help="Site root holding mkdocs.yml (default: .)")
    check.add_argument("--external", action="store_true", help="Also probe external URLs")
    check.add_argument("--timeout", type=float, default=10.0, help="Per-URL timeout in seconds")
    check.set_defaults(func=cmd_check)

    publish = sub.add_parser("publish", help="Initialise git, commit and configure the remote")
    publish.add_argument("--root", "-r", default=None, help="Site root (default: config output_dir)")
    publish.add_argument("--config", "-c", default=None, help="JSON configuration file")
    publish.add_argument("--push", action="store_true", help="Push the branch after preparing")
    publish.set_defaults(func=cmd_publish)

    show = sub.add_parser("config", help="Print or save the effective configuration")
    show.add_argument("--config", "-c", default=None, help="JSON configuration file")
    show.add_argument("--save", default=None, help="Write the configuration to this JSON file")
    show.set_defaults(func=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``docscaffold`` / ``python -m docscaffold``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except (OSError, ValidationError) as exc:
        print_error(f"Configuration error: {exc}")
        return 1
