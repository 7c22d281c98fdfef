from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import typer

from peakviz.chart import render_chart, save_chart
from peakviz.config import INDEX_VARIANT, VARIANTS, get_settings
from peakviz.errors import PeakvizError
from peakviz.loader import load_readings
from peakviz.logging_config import configure_logging

app = typer.Typer(
    help="Render hourly energy usage as a peak/off-peak shaded chart.",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)


@app.command()
def main(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Usage export (.xlsx or .csv)."),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Where to save the chart (defaults to PEAKVIZ_OUTPUT env or usage_chart.png).",
    ),
    variant: str = typer.Option(INDEX_VARIANT, "--variant", help="X axis layout: 'index' (Id column) or 'time'."),
    sheet: Optional[str] = typer.Option(None, "--sheet", help="Worksheet name for spreadsheet input."),
    days: Optional[int] = typer.Option(None, "--days", min=1, help="Number of days to shade (default: from data)."),
    strict: bool = typer.Option(False, "--strict/--no-strict", help="Fail on gaps or bad rows instead of warning."),
    title: Optional[str] = typer.Option(None, "--title", help="Chart title."),
    show: bool = typer.Option(False, "--show", help="Open the chart in a window after saving."),
) -> None:
    """Load a usage export and write the shaded chart."""
    configure_logging()
    if variant not in VARIANTS:
        raise typer.BadParameter(f"expected one of {', '.join(VARIANTS)}", param_hint="--variant")

    destination = output or get_settings().output_path
    try:
        readings = load_readings(file, variant=variant, sheet=sheet, strict=strict, total_days=days)
        fig = render_chart(readings, variant=variant, total_days=days, title=title)
    except PeakvizError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    saved = save_chart(fig, destination)
    typer.secho(f"Saved chart to {saved}", fg=typer.colors.GREEN)
    if show:
        plt.show()
    plt.close(fig)


if __name__ == "__main__":
    app()
