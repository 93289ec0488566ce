"""Typer-based command line interface for the archive loader."""
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from catalog import CatalogScanner, IndexSummary, LoggingObserver, ScanConfig, build_index  # type: ignore  # noqa: E402
from catalog.errors import FatalPreconditionError  # type: ignore  # noqa: E402
from catalog.extractor import CatalogRecordExtractor  # type: ignore  # noqa: E402
from catalog.index import IndexBuilder  # type: ignore  # noqa: E402
from loader import DataLoader, read_index_file, write_index_file  # type: ignore  # noqa: E402
from utils.config import load_config  # type: ignore  # noqa: E402
from utils.logging import configure_logging  # type: ignore  # noqa: E402

app = typer.Typer(add_completion=False)
console = Console(stderr=True)


class RichObserver(LoggingObserver):
    """Print messages to the console and drive a progress bar."""

    def __init__(self, progress: Progress) -> None:
        self.progress = progress
        self.task = progress.add_task("Loading", total=None)

    def on_info(self, message: str) -> None:
        self.progress.console.print(f"[cyan]{message}[/cyan]")

    def on_error(self, message: str) -> None:
        super().on_error(message)
        self.progress.console.print(f"[red]{message}[/red]")

    def on_progress(self, n: int, total: int) -> None:
        self.progress.update(self.task, completed=n, total=total)

    def on_complete(self, message: str) -> None:
        self.progress.console.print(f"[green]{message}[/green]")


def _resolve_root(path: Path) -> Path:
    if not path.is_dir():
        raise typer.BadParameter(f"Path {path} does not exist or is not a directory")
    return path


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging.")) -> None:
    configure_logging("DEBUG" if verbose else "INFO")


@app.command()
def walk(
    root: Path = typer.Argument(..., help="Root of the archive data tree."),
    follow_symlinks: bool = typer.Option(False, "--follow-symlinks/--no-follow-symlinks"),
) -> None:
    """List catalog folders found under ROOT."""

    result = CatalogScanner().walk(ScanConfig(root=_resolve_root(root), follow_symlinks=follow_symlinks))
    for entry in result.entries:
        typer.echo(f"{entry.folder}\t{entry.file}")
    for error in result.errors:
        console.print(f"[red]{error.message}[/red]")
    typer.echo(f"Found {len(result.entries)} catalog folders ({len(result.errors)} errors)")


@app.command()
def index(
    root: Path = typer.Argument(..., help="Root of the archive data tree."),
    out: Path = typer.Option(Path("./outputs"), "--out", help="Directory to write index.json into."),
    catalog_url: Optional[str] = typer.Option(None, "--catalog-url", help="Base URL of the online catalog."),
    config_path: Path = typer.Option(Path("archive.yml"), "--config", help="YAML configuration file."),
) -> None:
    """Build the index for ROOT and write index.json without copying any files."""

    config = load_config(config_path, catalog_base_url=catalog_url)
    builder = IndexBuilder(extractor=CatalogRecordExtractor(catalog_base_url=config.catalog_base_url))
    try:
        result = build_index(
            ScanConfig(root=_resolve_root(root), follow_symlinks=config.follow_symlinks), builder=builder
        )
    except FatalPreconditionError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    out.mkdir(parents=True, exist_ok=True)
    path = write_index_file(out, result.collections, result.items)
    typer.echo(
        f"Indexed {len(result.items)} items in {len(result.collections)} collections "
        f"({len(result.errors)} errors) into {path}"
    )


@app.command()
def load(
    data_path: Path = typer.Argument(..., help="Root of the archive data tree."),
    target: Path = typer.Argument(..., help="Mount point of the target device."),
    device: Optional[str] = typer.Option(None, "--device", help="raspberry-pi or usb-disk."),
    content_base: Optional[Path] = typer.Option(
        None, "--content-base", help="Folder holding the viewer application and site assets."
    ),
    config_path: Path = typer.Option(Path("archive.yml"), "--config", help="YAML configuration file."),
) -> None:
    """Index DATA_PATH and install it onto TARGET."""

    config = load_config(
        config_path,
        data_path=_resolve_root(data_path),
        target_path=target,
        target_device=device,
        content_base_path=content_base,
    )
    with Progress(
        TextColumn("[progress.description]{task.description}"), BarColumn(), MofNCompleteColumn(), console=console
    ) as progress:
        loader = DataLoader(config, observer=RichObserver(progress))
        try:
            result = asyncio.run(loader.load())
        except FatalPreconditionError as exc:
            raise typer.Exit(code=1) from exc
    typer.echo(f"Loaded {len(result.items)} items in {len(result.collections)} collections onto {target}")


@app.command()
def summarize(index_path: Path = typer.Argument(..., help="index.json path or the folder holding it.")) -> None:
    """Print item, collection and file counts for an index."""

    try:
        catalog_index = read_index_file(index_path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"Index {index_path} not found") from exc
    summary = IndexSummary.from_index(catalog_index)
    typer.echo(summary.model_dump_json(indent=2))


if __name__ == "__main__":
    app()
