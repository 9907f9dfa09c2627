from __future__ import annotations

import argparse
from typing import Any, Sequence

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich import box

from .codegen.core.config import ConfigError, ConfigManager, ENV_SUBSET
from .codegen.core.generator import GeneratorError
from .codegen.pipeline import GenerationPipeline, RunSummary
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser of the generator CLI."""
    parser = argparse.ArgumentParser(
        prog="godot-dts",
        description="Generate TypeScript declarations from Godot class reference XML",
    )

    parser.add_argument("--tag", metavar="TAG", help="Godot version tag of the docs")
    parser.add_argument(
        "--classes-dir",
        metavar="DIR",
        help="Directory holding the class reference XML files",
    )
    parser.add_argument(
        "--output",
        "-o",
        metavar="DIR",
        help="Output root; files are written to <DIR>/<TAG>",
    )
    parser.add_argument(
        "--subset",
        metavar="NAMES",
        help=f"Comma/space separated class names to generate (default: ${ENV_SUBSET})",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--remote",
        action="store_true",
        help="Fetch the subset's descriptions from the upstream repository",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    return parser


class CLIHandler:
    """Handle command-line interface (CLI) operations for a generation run."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        logger.debug("CLIHandler initialized")

    def run(self, args: Any) -> int:
        """Run generation based on parsed arguments.

        Args:
            args: Parsed CLI arguments.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        overrides = {
            "godot_tag": args.tag,
            "classes_dir": args.classes_dir,
            "output_root": args.output,
            "subset": args.subset,
        }

        manager = ConfigManager()
        try:
            config = manager.get_config(overrides, config_file=args.config)
        except ConfigError as e:
            self.console.print(f"❌ [red]Configuration error: {e}[/red]")
            logger.error("Configuration error: %s", e)
            return 1

        for warning in manager.validate_config(config):
            self.console.print(f"⚠️  [yellow]{warning}[/yellow]")

        pipeline = GenerationPipeline(config)

        try:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TextColumn("{task.completed}/{task.total}"),
                console=self.console,
                transient=True,
            ) as progress:
                task = progress.add_task("Generating declarations...", total=None)

                def advance(source) -> None:
                    progress.update(task, advance=1, description=f"Generated {source.name}")

                summary = pipeline.run(remote=args.remote, on_progress=advance)
        except (ConfigError, GeneratorError) as e:
            self.console.print(f"❌ [red]Generation failed: {e}[/red]")
            logger.error("Generation failed: %s", e)
            return 1

        self._print_summary(summary)
        return 0

    def _print_summary(self, summary: RunSummary) -> None:
        table = Table(title="Generation summary", box=box.ROUNDED)
        table.add_column("Result", style="cyan")
        table.add_column("Classes", justify="right")

        table.add_row("Generated", f"[green]{len(summary.generated)}[/green]")
        table.add_row("Skipped", f"[yellow]{len(summary.skipped)}[/yellow]")
        table.add_row("Failed", f"[red]{len(summary.failed)}[/red]")
        table.add_row("Warnings", str(len(summary.warnings)))

        self.console.print(table)
        if summary.failed:
            self.console.print(f"[red]Failed:[/red] {', '.join(summary.failed)}")
        self.console.print(f"✅ Generated {summary.output_dir}")


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the ``godot-dts`` command."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    return CLIHandler().run(args)
