from __future__ import annotations
from pathlib import Path
from typing import List, Optional
import logging
import typer
from dotenv import load_dotenv

import fetchkit
from fetchkit.infra.adapters.http_fetcher import HttpResourceFetcher

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _install(cache_dir: Optional[Path]) -> HttpResourceFetcher:
    adapter = HttpResourceFetcher(cache_dir=cache_dir)
    fetchkit.init(resource_fetcher=adapter)
    return adapter


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v")) -> None:
    load_dotenv()
    if verbose:
        fetchkit.configure_logging(logging.DEBUG)


@app.command()
def get(
    sources: List[str],
    cache_dir: Optional[Path] = typer.Option(None, "--cache-dir"),
) -> None:
    """Download resources and print their local paths."""
    _install(cache_dir)

    def progress(value: float) -> None:
        typer.echo(f"{value:6.2f}%", err=True)

    try:
        paths = fetchkit.fetch(progress, *sources)
    except fetchkit.FetchKitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)
    if paths is None:
        typer.echo("Interrupted.", err=True)
        raise typer.Exit(code=1)
    for path in paths:
        typer.echo(path)


@app.command()
def cat(path: str) -> None:
    """Print a local file through the resource fetcher."""
    _install(None)
    try:
        text = fetchkit.fs.read_as_string(path)
    except fetchkit.FetchKitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)
    typer.echo(text, nl=False)


@app.command()
def ls(cache_dir: Optional[Path] = typer.Option(None, "--cache-dir")) -> None:
    """List downloaded files."""
    adapter = _install(cache_dir)
    for path in adapter.list_downloaded_files():
        typer.echo(path)


if __name__ == "__main__":
    app()
