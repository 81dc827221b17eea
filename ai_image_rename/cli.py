"""Command-line interface for the AI image rename tool."""

import asyncio
import logging
import os
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.prompt import IntPrompt, Prompt

from .constants import (
    CASE_FORMATS,
    DEFAULT_CONFIG_FILE,
    DEFAULT_MODEL,
    ENV_OPENROUTER_API_KEY,
    ENV_OPENROUTER_MODEL,
)
from .core import CasingFormat, Config, OutcomeStatus, RunSummary
from .naming import OpenRouterDescriptionClient
from .pipeline import FilePipeline
from .safety import RenameCoordinator, filter_valid_image_paths
from .scheduler import Progress, Scheduler

# Load environment variables from .env file
load_dotenv()

console = Console()

STATUS_STYLES = {
    OutcomeStatus.SUCCESS: "[green]SUCCESS[/green]",
    OutcomeStatus.SKIPPED: "[yellow]SKIPPED[/yellow]",
    OutcomeStatus.ERROR: "[red]ERROR[/red]",
}


def setup_logging(verbose: bool = False) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )
    # Keep HTTP client chatter out of debug output
    for name in ("httpx", "httpcore", "openai"):
        logging.getLogger(name).setLevel(logging.WARNING)


class ImageRenameTool:
    """Main image rename tool class."""

    def __init__(
        self,
        config_path: str = DEFAULT_CONFIG_FILE,
        model: str | None = None,
    ):
        self.config = self._load_config(config_path)
        self.describer = self._setup_describer(model)

    def _load_config(self, config_path: str) -> Config:
        """Load configuration from file."""
        if not os.path.exists(config_path):
            return Config()
        try:
            return Config.from_file(config_path)
        except Exception as e:
            console.print(
                f"[yellow]Warning: Could not load config from {config_path}: "
                f"{escape(str(e))}[/yellow]"
            )
            return Config()

    def _setup_describer(self, model: str | None) -> OpenRouterDescriptionClient:
        """Setup description client."""
        api_key = os.getenv(ENV_OPENROUTER_API_KEY)
        if not api_key:
            raise click.ClickException(
                f"{ENV_OPENROUTER_API_KEY} environment variable is not set."
            )

        model = model or os.getenv(ENV_OPENROUTER_MODEL) or DEFAULT_MODEL
        return OpenRouterDescriptionClient(api_key, model)

    def choose_format(self, casing: str | None) -> CasingFormat:
        """Use the given format or ask for one."""
        if casing:
            return CasingFormat(casing)

        console.print("[bold]Select the desired filename format:[/bold]")
        for value, (label, hint) in CASE_FORMATS.items():
            console.print(
                f"  [bold cyan]{value}[/bold cyan] {label} [dim]{hint}[/dim]",
                highlight=False,
            )
        choice = Prompt.ask(
            "Filename format",
            choices=list(CASE_FORMATS),
            default=self.config.default_format.value,
        )
        return CasingFormat(choice)

    def choose_concurrency(self, concurrency: int | None) -> int:
        """Use the given concurrency bound or ask for one."""
        if concurrency is not None:
            return concurrency

        while True:
            value = IntPrompt.ask(
                "Max concurrent operations", default=self.config.max_concurrency
            )
            if value >= 1:
                return value
            console.print("[red]Please enter a positive number.[/red]")

    async def process_files(
        self,
        image_paths: list[Path],
        casing: CasingFormat,
        concurrency: int,
    ) -> RunSummary:
        """Rename all admitted images with bounded concurrency."""
        pipeline = FilePipeline(self.describer, casing, RenameCoordinator())
        scheduler = Scheduler(pipeline, concurrency, on_progress=display_progress)
        return await scheduler.run(image_paths)


def display_progress(progress: Progress) -> None:
    """Print one line for a completed file."""
    outcome = progress.outcome
    new_name = ""
    if outcome.status is OutcomeStatus.SUCCESS and outcome.new_path is not None:
        new_name = f" -> {escape(outcome.new_path.name)}"

    console.print(
        f"\\[{STATUS_STYLES[outcome.status]}] {escape(progress.source.name)}"
        f"{new_name} ({progress.completed}/{progress.total})",
        highlight=False,
    )


def display_summary(summary: RunSummary) -> None:
    """Print the final counts."""
    console.print(
        f"Summary: [green]{summary.success}[/green] renamed, "
        f"[yellow]{summary.skipped}[/yellow] skipped, "
        f"[red]{summary.error}[/red] errors.",
        highlight=False,
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("files", nargs=-1, type=click.Path(path_type=Path))
@click.option(
    "--format",
    "-f",
    "casing",
    type=click.Choice(list(CASE_FORMATS)),
    help="Filename format (asked interactively when omitted)",
)
@click.option(
    "--concurrency",
    "-j",
    type=click.IntRange(min=1),
    help="Max concurrent operations (asked interactively when omitted)",
)
@click.option(
    "--model",
    default=None,
    help=f"Model to use [default: ${ENV_OPENROUTER_MODEL} or {DEFAULT_MODEL}]",
)
@click.option(
    "--config",
    default=DEFAULT_CONFIG_FILE,
    help=f"Configuration file path [default: {DEFAULT_CONFIG_FILE}]",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(files, casing, concurrency, model, config, verbose):
    """Rename images with AI-generated descriptive filenames."""
    setup_logging(verbose)
    console.rule("[bold]AI Image Rename[/bold]")

    try:
        tool = ImageRenameTool(config, model=model)

        if not files:
            console.print("[yellow]No image files provided.[/yellow]")
            console.print("Usage: ai-image-rename <image_file1.jpg> ...")
            return

        with console.status("Filtering input files..."):
            image_paths = filter_valid_image_paths(list(files))
        console.print(f"Found {len(image_paths)} valid image(s).")

        if not image_paths:
            console.print("[yellow]No valid image files to process.[/yellow]")
            return

        try:
            selected_format = tool.choose_format(casing)
            selected_concurrency = tool.choose_concurrency(concurrency)
        except (KeyboardInterrupt, EOFError):
            console.print("\nOperation cancelled.")
            return

        console.print("[yellow]Processing images...[/yellow]")
        summary = asyncio.run(
            tool.process_files(image_paths, selected_format, selected_concurrency)
        )

        console.print("[green]✓ Processing complete![/green]")
        display_summary(summary)

    except click.ClickException:
        # Re-raise click exceptions without modification
        raise
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.ClickException(str(e)) from e
