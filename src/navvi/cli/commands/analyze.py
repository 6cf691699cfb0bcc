from pathlib import Path
from typing import Optional

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from navvi.config.config import get_config
from navvi.core.analysis_store import InMemoryAnalysisStore
from navvi.core.engine import AnalysisEngine
from navvi.core.exceptions import AnalysisError
from navvi.tools.code_analyzer.models import AnalysisProgress
from navvi.tools.git_analyzer import GitHistoryAnalyzer
from navvi.tools.repo_manager import extract_repo_name
from ..ui import console, print_error, print_success, print_title, render_analysis


def analyze(
    repository: str = typer.Argument(".", help="Local path or git URL of the repository"),
    json_output: Optional[Path] = typer.Option(
        None, "--json", "-j", help="Write the full analysis as JSON to this file"
    ),
    threshold: Optional[int] = typer.Option(
        None, "--threshold", "-t", min=1, help="Complexity threshold for debt and high-complexity files"
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", min=1, help="Parse files in parallel with this many threads"
    ),
    history: bool = typer.Option(True, "--history/--no-history", help="Collect per-file commit counts"),
):
    """Analyze a JavaScript/TypeScript repository."""
    config = get_config().model_copy(deep=True)
    if threshold is not None:
        config.analysis.complexity_threshold = threshold
    if workers is not None:
        config.analysis.max_workers = workers
    config.git.enable_history = history and config.git.enable_history

    print_title(f"Analyzing: {extract_repo_name(repository)}", repository)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.percentage:>3.0f}%"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Starting...", total=100)

        def on_progress(event: AnalysisProgress):
            progress.update(task, completed=event.percent, description=f"[cyan]{event.stage}[/cyan] {event.message}")

        engine = AnalysisEngine(
            config=config,
            history_provider=GitHistoryAnalyzer() if config.git.enable_history else None,
            store=InMemoryAnalysisStore(config.cache.max_entries, config.cache.ttl_seconds),
            progress_callback=on_progress,
        )
        try:
            analysis = engine.analyze_repository(repository)
        except AnalysisError as e:
            progress.stop()
            print_error(e.message)
            raise typer.Exit(code=1)

    render_analysis(analysis)

    if json_output:
        json_output.parent.mkdir(parents=True, exist_ok=True)
        json_output.write_text(analysis.to_json(), encoding="utf-8")
        print_success(f"Analysis written to {json_output}")
