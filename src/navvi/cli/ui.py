"""
Navvi CLI UI Helpers
Centralized Rich console, styling and result rendering.
"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

from navvi.tools.code_analyzer.models import RepositoryAnalysis

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "title": "bold magenta",
        "subtitle": "blue",
        "dim": "dim white",
    }
)

console = Console(theme=custom_theme)


def print_success(message: str):
    """Print a success message with green checkmark."""
    console.print(f"✅ [success]{message}[/success]")


def print_error(message: str):
    """Print an error message with red cross."""
    console.print(f"❌ [error]{message}[/error]")


def print_title(title: str, subtitle: Optional[str] = None):
    """Print a styled title."""
    console.print()
    console.rule(f"[title]{title}[/title]")
    if subtitle:
        console.print(f"[subtitle]{subtitle}[/subtitle]", justify="center")
    console.print()


def create_table(columns: list[str], title: Optional[str] = None) -> Table:
    """Create a standard styled table."""
    table = Table(
        title=title,
        title_style="bold magenta",
        header_style="bold cyan",
        show_lines=False,
        box=None,
    )
    for col in columns:
        table.add_column(col)
    return table


def render_analysis(analysis: RepositoryAnalysis):
    """Print the summary, component and insight tables for one analysis."""
    metrics = analysis.metrics
    insights = analysis.insights

    summary = create_table(["Metric", "Value"], title="Summary")
    summary.add_row("Files", str(metrics.total_files))
    summary.add_row("Lines", str(metrics.total_lines))
    summary.add_row("Languages", ", ".join(f"{k}: {v}" for k, v in sorted(metrics.languages.items())) or "-")
    summary.add_row("Average complexity", f"{metrics.average_complexity:.2f}")
    summary.add_row("Max complexity", str(metrics.max_complexity))
    summary.add_row("Maintainability index", f"{metrics.maintainability_index:.1f}")
    summary.add_row("Technical debt", f"{metrics.technical_debt:.1f}")
    summary.add_row("Architectural style", insights.architectural_style)
    summary.add_row("Code quality", insights.code_quality)
    summary.add_row("Complexity", insights.complexity_distribution)
    console.print(summary)

    if analysis.architecture.components:
        components = create_table(["Component", "Type", "Files", "Complexity", "Dependents"], title="Components")
        for component in analysis.architecture.components:
            components.add_row(
                component.name,
                component.type,
                str(len(component.files)),
                str(component.complexity),
                ", ".join(component.dependents) or "-",
            )
        console.print(components)

    if insights.high_complexity_files:
        complex_files = create_table(["File", "Complexity"], title="High Complexity Files")
        for entry in insights.high_complexity_files:
            complex_files.add_row(entry["path"], str(entry["complexity"]))
        console.print(complex_files)

    if insights.hotspots:
        hotspots = create_table(["File", "Commits"], title="Hotspots")
        for entry in insights.hotspots:
            hotspots.add_row(entry["path"], str(entry["commit_count"]))
        console.print(hotspots)

    notes = [f"• {issue}" for issue in insights.potential_issues]
    notes += [f"→ {rec}" for rec in insights.recommendations]
    if notes:
        console.print(Panel("\n".join(notes), title="[bold]Issues & Recommendations[/bold]", border_style="yellow", expand=False))

    path = insights.learning_path
    console.print(
        f"[subtitle]Learning path:[/subtitle] {path.difficulty} "
        f"(~{path.estimated_hours}h, {len(path.modules)} modules)"
    )
