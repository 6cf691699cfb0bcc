"""
Navvi - Command Line Interface (Typer)

Entry point for the repository analyzer CLI.
"""
import typer

from navvi import __version__
from navvi.config.config import get_config
from navvi.utils.logger import setup_logging
from .commands import analyze
from .ui import console, print_title

app = typer.Typer(
    name="navvi",
    help="Navvi - Static analysis and learning paths for JavaScript/TypeScript repositories",
    add_completion=True,
    rich_markup_mode="rich",
)

app.command("analyze")(analyze.analyze)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None, "--version", "-v", help="Show version", is_eager=True
    ),
    log_level: str = typer.Option(None, "--log-level", help="Override LOG_LEVEL"),
):
    """
    [bold cyan]Navvi[/bold cyan] - Repository analyzer.

    Use [bold]navvi --help[/bold] to see available commands.
    """
    if version:
        console.print(f"[bold cyan]Navvi[/bold cyan] v{__version__}")
        raise typer.Exit()

    logging_config = get_config().logging
    setup_logging(level=log_level or logging_config.log_level, log_file=logging_config.log_file)

    if ctx.invoked_subcommand is None:
        print_title("Navvi", "Repository analyzer")
        console.print(
            "Use [bold green]navvi --help[/bold green] to see available commands."
        )


if __name__ == "__main__":
    app()
