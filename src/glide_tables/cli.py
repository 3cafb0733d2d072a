# src/glide_tables/cli.py
"""glide-tables Command Line Interface.

Entry point for the glide-tables CLI tool.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Iterator
from enum import Enum
from pathlib import Path
from typing import Any

import httpx
import typer
from pydantic import ValidationError

from glide_tables import __version__
from glide_tables.contracts.errors import GlideTablesError, PartialBatchFailure
from glide_tables.core.config import GlideSettings, load_settings
from glide_tables.glide import Glide

__all__ = ["app"]

app = typer.Typer(
    name="glide-tables",
    help="Batched row mutations for Glide Big Tables.",
    no_args_is_help=True,
)


class UploadMode(str, Enum):
    add = "add"
    overwrite = "overwrite"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"glide-tables version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from a .env file.

    Args:
        env_file: Explicit path to .env file. If None, searches for .env
                 in current directory and parent directories.

    Returns:
        True if .env was found and loaded, False otherwise.

    Raises:
        typer.Exit: If explicit env_file path doesn't exist.
    """
    from dotenv import load_dotenv

    if env_file is not None:
        if not env_file.exists():
            typer.secho(f"Error: .env file not found: {env_file}", fg=typer.colors.RED, err=True)
            raise typer.Exit(1)
        return load_dotenv(env_file, override=False)

    return load_dotenv(override=False)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a settings YAML file (GLIDE_* environment variables still apply).",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Path to .env file (skips automatic search).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """Batched row mutations for Glide Big Tables."""
    from glide_tables.core.logging import configure_logging

    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "WARNING")

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho("Warning: --env-file ignored because --no-dotenv is set.", fg=typer.colors.YELLOW, err=True)

    ctx.obj = config


def _settings(ctx: typer.Context) -> GlideSettings:
    config_path: Path | None = ctx.obj
    try:
        return load_settings(config_path)
    except FileNotFoundError:
        typer.secho(f"Error: Settings file not found: {config_path}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.secho("Configuration errors:", fg=typer.colors.RED, err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None


def _read_rows(path: Path) -> Iterator[dict[str, Any]]:
    """Yield rows from a JSON-lines file, skipping blank lines."""
    with path.open(encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            row = json.loads(line)
            if not isinstance(row, dict):
                raise ValueError(f"{path}:{line_number}: expected a JSON object, got {type(row).__name__}")
            yield row


@app.command()
def tables(ctx: typer.Context) -> None:
    """List the Big Tables visible to the configured token."""
    settings = _settings(ctx)

    async def _list() -> list[tuple[str, str]]:
        async with Glide(settings) as glide:
            return [(table.id, table.name) for table in await glide.get_big_tables()]

    try:
        listing = asyncio.run(_list())
    except (GlideTablesError, httpx.HTTPError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from None

    for table_id, name in listing:
        typer.echo(f"{table_id}\t{name}")


@app.command()
def upload(
    ctx: typer.Context,
    table_id: str = typer.Argument(..., help="Backend table identifier."),
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON-lines file, one row object per line."),
    mode: UploadMode = typer.Option(UploadMode.add, "--mode", "-m", help="Add rows or replace the table's rows."),
    stash: bool = typer.Option(
        False,
        "--stash",
        help="Stream rows through a stash and commit once (for large files).",
    ),
    batch_size: int | None = typer.Option(
        None,
        "--batch-size",
        "-b",
        min=1,
        help="Rows per request (defaults to max_mutations).",
    ),
) -> None:
    """Upload rows from a JSON-lines file into a Big Table."""
    settings = _settings(ctx)

    async def _upload() -> int:
        async with Glide(settings) as glide:
            table = glide.big_table(table_id, max_mutations=batch_size)
            if stash:
                staged = table.create_stash()
                await staged.append_all(_read_rows(file))
                if mode is UploadMode.overwrite:
                    return len(await staged.commit_as_overwrite())
                return len(await staged.commit_as_insert())
            rows = list(_read_rows(file))
            if mode is UploadMode.overwrite:
                return len(await table.overwrite(rows))
            return len(await table.add(rows))

    try:
        written = asyncio.run(_upload())
    except PartialBatchFailure as e:
        typer.secho(
            f"Error: upload stopped at chunk {e.chunk_index + 1}/{e.chunk_count}; "
            f"{e.chunks_completed} earlier chunk(s) were already written: {e.cause}",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(1) from None
    except (GlideTablesError, httpx.HTTPError, ValueError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from None

    typer.echo(f"Wrote {written} row(s) to {table_id}")
