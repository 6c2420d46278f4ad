"""Command-line interface for gridframe."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console

if TYPE_CHECKING:
    from gridframe.config.settings import IngestionConfig

app = typer.Typer(
    name="gridframe",
    help="Load time- and position-tagged CSV columns into queryable fields.",
    no_args_is_help=True,
)

console = Console()


@app.command()
def inspect(
    file: Annotated[
        Path,
        typer.Argument(
            help="Delimited file to ingest.",
            exists=True,
            dir_okay=False,
        ),
    ],
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to ingestion configuration YAML file.",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    time_column: Annotated[
        str | None,
        typer.Option(
            "--time-column",
            "-t",
            help="Header name of the time column.",
        ),
    ] = None,
    coordinate_columns: Annotated[
        str | None,
        typer.Option(
            "--coordinate-columns",
            "-x",
            help="Comma-separated header names of the x, y and z columns.",
        ),
    ] = None,
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            help="Treat the first row as data.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log ingestion progress to stderr.",
        ),
    ] = False,
) -> None:
    """Ingest a file and summarize the resulting fields."""
    import yaml

    from gridframe.config import IngestionConfig, load_config
    from gridframe.errors import GridFrameError
    from gridframe.ingestion import read_csv_fields
    from gridframe.reporter import ConsoleReporter
    from gridframe.utils.logging import configure_logging

    configure_logging(verbose)
    reporter = ConsoleReporter(console)

    try:
        ingestion_config = load_config(config) if config else IngestionConfig()
        ingestion_config = _apply_overrides(
            ingestion_config, time_column, coordinate_columns, no_header
        )
    except (ValueError, yaml.YAMLError) as e:
        reporter.print_error(e)
        raise typer.Exit(code=1) from e

    try:
        frame = read_csv_fields(file, ingestion_config)
    except GridFrameError as e:
        reporter.print_error(e)
        raise typer.Exit(code=1) from e

    reporter.print_frame(frame, title=str(file))


@app.command()
def version() -> None:
    """Show version information."""
    from gridframe import __version__

    console.print(f"gridframe version {__version__}")


def _apply_overrides(
    config: "IngestionConfig",
    time_column: str | None,
    coordinate_columns: str | None,
    no_header: bool,
) -> "IngestionConfig":
    """Merge command-line options over a loaded configuration."""
    from gridframe.config import ColumnRolesConfig, IngestionConfig

    if (time_column is None) != (coordinate_columns is None):
        msg = "--time-column and --coordinate-columns must be given together"
        raise ValueError(msg)

    columns = config.columns
    if time_column is not None and coordinate_columns is not None:
        names = [name.strip() for name in coordinate_columns.split(",")]
        if len(names) != 3:
            msg = f"--coordinate-columns needs 3 names, got {len(names)}"
            raise ValueError(msg)
        columns = ColumnRolesConfig(
            time_column=time_column,
            coordinate_columns=(names[0], names[1], names[2]),
        )

    source = config.source
    if no_header:
        source = source.model_copy(update={"has_header": False})

    return IngestionConfig(columns=columns, source=source, decoding=config.decoding)


if __name__ == "__main__":
    app()
