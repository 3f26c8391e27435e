"""CLI entry point for perf_driver reports."""

import json
import logging
import typer
from typing import Optional
from pathlib import Path
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from perf_driver.baselines import load_baselines
from perf_driver.driver import DEFAULT_REPORT_ROOT, process_response
from perf_driver.summarizer import load_timeline, summarize_timeline

app = typer.Typer(
    help="perf_driver - Frame timing reports for Flutter integration tests",
    no_args_is_help=True
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)]
    )


def _require_file(path: Optional[Path], kind: str) -> None:
    if path is None:
        return
    if not path.exists():
        console.print(f"[red]Error:[/red] {kind} file not found: {path}")
        raise typer.Exit(code=1)
    if not path.is_file():
        console.print(f"[red]Error:[/red] Path is not a file: {path}")
        raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
):
    """perf_driver - Frame timing reports for Flutter integration tests."""
    _configure_logging(verbose)


@app.command()
def summarize(
    timeline: Path = typer.Option(..., "--timeline", help="Path to a timeline JSON trace"),
    out: Path = typer.Option("timeline_summary.json", "--out", help="Output JSON file path")
):
    """Reduce a timeline trace to frame statistics JSON."""
    _require_file(timeline, "Timeline")

    console.print(f"[blue]Summarizing timeline:[/blue] {timeline}")
    try:
        stats = summarize_timeline(load_timeline(timeline))
        with open(out, "w", encoding="utf-8") as f:
            json.dump(
                {"performance": stats.to_performance(), "frame_rate_info": stats.frame_rate_info()},
                f,
                indent=2
            )
    except Exception as e:
        console.print(f"[red]Error during summary:[/red] {e}")
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] Summary written to: {out}")


@app.command()
def report(
    data: Path = typer.Option(..., "--data", help="Driver response or testing data JSON"),
    baselines: Optional[Path] = typer.Option(
        None, "--baselines", envvar="PERF_DRIVER_BASELINES", help="JSON file of baseline overrides"
    ),
    out_dir: Path = typer.Option(
        DEFAULT_REPORT_ROOT, "--out-dir", envvar="PERF_DRIVER_REPORT_DIR", help="Report root directory"
    ),
    timeline_dir: Optional[Path] = typer.Option(
        None, "--timeline-dir", help="Also export the raw timeline and its summary here"
    ),
    show: bool = typer.Option(False, "--show", help="Render the report in the terminal")
):
    """Generate and save a markdown performance report."""
    _require_file(data, "Data")
    _require_file(baselines, "Baselines")

    console.print(f"[blue]Report data:[/blue] {data}")
    console.print(f"[blue]Report root:[/blue] {out_dir}")
    if baselines is not None:
        console.print(f"[blue]Baselines:[/blue] {baselines}")

    try:
        effective = load_baselines(baselines)
        with open(data, "r", encoding="utf-8") as f:
            response = json.load(f)
        result = process_response(response, effective, report_root=out_dir, timeline_dir=timeline_dir)
    except Exception as e:
        console.print(f"[red]Error during report generation:[/red] {e}")
        raise typer.Exit(code=1)

    if result is None:
        console.print("[yellow]No data received[/yellow]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] Report saved: {result.report_path}")
    for path in result.timeline_paths:
        console.print(f"[green]✓[/green] Timeline written to: {path}")
    if show:
        console.print(Markdown(result.report.markdown))


@app.command(name="baselines")
def show_baselines(
    baselines: Optional[Path] = typer.Option(
        None, "--baselines", envvar="PERF_DRIVER_BASELINES", help="JSON file of baseline overrides"
    )
):
    """Print the effective baselines as JSON."""
    _require_file(baselines, "Baselines")
    try:
        effective = load_baselines(baselines)
    except Exception as e:
        console.print(f"[red]Error loading baselines:[/red] {e}")
        raise typer.Exit(code=1)
    console.print_json(json.dumps(effective.to_dict()))


if __name__ == "__main__":
    app()
