import mimetypes
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from docanalytics.classification.models import ClassificationMethod
from docanalytics.config.settings import Settings
from docanalytics.extraction.exceptions import UnsupportedFormatError
from docanalytics.extraction.extractor import build_extractor
from docanalytics.extraction.models import RawArtifact
from docanalytics.ingestion.batch import BatchIngestor
from docanalytics.ingestion.ingestor import build_default_classifier, build_ingestor
from docanalytics.logging.logger import Log
from docanalytics.search.models import SortMode, SortOrder
from docanalytics.search.service import SearchService
from docanalytics.store.base import DocumentStore
from docanalytics.store.connection import close_pool
from docanalytics.store.factory import StoreFactory
from docanalytics.store.models import IndexedDocument

app = typer.Typer(help="Document understanding pipeline: extract, classify and search documents.")
console = Console()


def read_artifact(path: Path) -> RawArtifact:
    media_type, _ = mimetypes.guess_type(path.name)
    return RawArtifact(
        data=path.read_bytes(),
        media_type=media_type or "application/octet-stream",
        filename=path.name,
    )


def _expand(paths: list[Path]) -> list[Path]:
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(p for p in path.rglob("*") if p.is_file()))
        elif path.exists():
            files.append(path)
        else:
            console.print(f"[red]Error:[/] Path {path} does not exist")
            raise typer.Exit(1)
    return files


def _settings() -> Settings:
    settings = Settings()
    Log.configure(settings.log_level)
    return settings


def _ingest(
    settings: Settings,
    store: DocumentStore,
    paths: list[Path],
    owner: str,
    method: ClassificationMethod | None,
) -> list[IndexedDocument]:
    ingestor = build_ingestor(settings, store, StoreFactory.create_blob_store(settings))
    batch = BatchIngestor(ingestor, max_workers=settings.ingest_max_workers)
    result = batch.ingest_all([read_artifact(p) for p in _expand(paths)], owner, method)
    for failure in result.failures:
        console.print(f"[yellow]Skipped[/] {failure.filename}: {failure.error}")
    return result.documents


@app.command()
def classify(
    path: Path,
    method: ClassificationMethod | None = typer.Option(None, help="Classification method"),
) -> None:
    """Extract and classify a single file without storing it."""
    settings = _settings()
    try:
        extracted = build_extractor(settings).extract(read_artifact(path))
    except UnsupportedFormatError as exc:
        console.print(f"[red]Error:[/] {exc}")
        raise typer.Exit(1) from exc
    result = build_default_classifier(settings).classify(extracted.title, extracted.content, method)

    console.print(f"[bold]Title:[/] {extracted.title} [dim]({extracted.title_source.value})[/]")
    console.print(f"[bold]Category:[/] {result.category} / {result.subcategory}")
    console.print(f"[bold]Confidence:[/] {result.confidence:.0%}")
    console.print(f"[bold]Algorithm:[/] {result.algorithm}")
    if result.keywords:
        console.print(f"[bold]Keywords:[/] {', '.join(result.keywords)}")


@app.command()
def ingest(
    paths: list[Path],
    owner: str = typer.Option("local", help="Owner of the ingested documents"),
    method: ClassificationMethod | None = typer.Option(None, help="Classification method"),
) -> None:
    """Ingest files or directories into the configured store."""
    settings = _settings()
    try:
        store = StoreFactory.create(settings)
        with console.status("[bold green]Ingesting documents..."):
            documents = _ingest(settings, store, paths, owner, method)
    finally:
        close_pool()

    table = Table(title=f"Ingested {len(documents)} documents")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Confidence", justify="right")
    table.add_column("Words", justify="right")
    for document in documents:
        table.add_row(
            document.title,
            f"{document.classification.category} / {document.classification.subcategory}",
            f"{document.classification.confidence:.0%}",
            str(document.extracted.metadata.word_count),
        )
    console.print(table)


@app.command()
def search(
    query: str,
    owner: str = typer.Option("local", help="Owner whose documents are searched"),
    path: list[Path] | None = typer.Option(None, help="Files to ingest before searching"),
    sort: SortMode = typer.Option(SortMode.RELEVANCE, help="Result order"),
    order: SortOrder = typer.Option(SortOrder.DESC, help="Sort direction"),
    limit: int = typer.Option(10, help="Maximum number of results"),
) -> None:
    """Search an owner's documents."""
    settings = _settings()
    try:
        store = StoreFactory.create(settings)
        if path:
            _ingest(settings, store, path, owner, None)
        results = SearchService(store).search(owner, query, sort, order, limit)
    finally:
        close_pool()

    if not results:
        console.print("[yellow]No matching documents.[/]")
        return
    for rank, result in enumerate(results, start=1):
        console.rule(f"[bold]{rank}. {result.document.title}")
        console.print(
            f"[dim]score {result.score:g} | {result.match_count} matches | "
            f"{result.document.classification.category}[/]"
        )
        console.print(result.snippet, markup=False)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
