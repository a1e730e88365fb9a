import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import LinkConfig, load_config, resolve_root
from .linker import (
    LinkResult,
    SkillLinkError,
    bootstrap_links,
    check_links,
)

logger = logging.getLogger(__name__)

# Plain line output so piped logs match the shell script this replaces.
console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2

STATE_STYLES = {
    "ok": "green",
    "missing": "yellow",
    "wrong-target": "yellow",
    "blocked": "bold red",
}


def _label(container: str, config: LinkConfig) -> str:
    return f"{container}/{config.link_name}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skill-links",
        description=(
            "Link each assistant's skills directory (.claude/skills, .cline/skills, ...) "
            "to the shared .agents/skills directory."
        ),
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Repository root (defaults to the current directory)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML or JSON file overriding containers, target or link_name",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only verify the links and print their state; change nothing",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every filesystem step to stderr",
    )
    return parser


def run_bootstrap(root: Path, config: LinkConfig) -> int:
    def _created(result: LinkResult) -> None:
        console.print(
            f"Created: {escape(_label(result.container, config))} -> {escape(result.link_text)}"
        )

    def _failed(error: SkillLinkError) -> None:
        err_console.print(
            f"[bold red]Error:[/] {escape(_label(error.container, config))}: {escape(str(error))}"
        )

    report = bootstrap_links(root, config, on_result=_created, on_failure=_failed)

    if report.ok:
        console.print(f"Done! Created {report.created_count} symlinks.")
        return EXIT_OK

    console.print(
        f"Done! Created {report.created_count} symlinks, {report.failed_count} failed."
    )
    return EXIT_FAILED


def run_check(root: Path, config: LinkConfig) -> int:
    statuses = check_links(root, config)

    table = Table(
        title="Skill Links",
        box=box.ROUNDED,
        title_style="bold cyan",
        header_style="bold bright_white",
        border_style="dim cyan",
        padding=(0, 1),
    )
    table.add_column("Link", style="cyan")
    table.add_column("Expected", style="white")
    table.add_column("Actual", style="dim")
    table.add_column("State")

    for status in statuses:
        style = STATE_STYLES.get(status.state, "white")
        table.add_row(
            escape(_label(status.container, config)),
            escape(status.expected),
            escape(status.actual or "-"),
            f"[{style}]{status.state}[/]",
        )
    console.print(table)

    bad = [s for s in statuses if not s.ok]
    if bad:
        console.print(f"{len(bad)} of {len(statuses)} links need attention.")
        return EXIT_FAILED
    console.print(f"All {len(statuses)} links are in place.")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the skill-links CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    try:
        root = resolve_root(args.root)
        config = load_config(args.config) if args.config else LinkConfig()
    except (OSError, ValueError) as e:
        # pydantic's ValidationError is a ValueError
        err_console.print(f"[bold red]Error:[/] {escape(str(e))}")
        return EXIT_USAGE

    logger.debug(f"Root: {root}; containers: {config.containers}; target: {config.target}")

    try:
        if args.check:
            return run_check(root, config)
        return run_bootstrap(root, config)
    except KeyboardInterrupt:
        err_console.print("\n[dim]Interrupted; re-run to finish linking.[/]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
