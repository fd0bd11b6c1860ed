from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from docanalytics.classification.models import ClassificationMethod
from docanalytics.extraction.models import RawArtifact
from docanalytics.ingestion.ingestor import Ingestor
from docanalytics.logging.logger import Log
from docanalytics.store.models import IndexedDocument


@dataclass(frozen=True)
class BatchFailure:
    filename: str
    error: str


@dataclass
class BatchResult:
    """Outcome of a batch. Order of documents is completion order."""

    documents: list[IndexedDocument] = field(default_factory=list)
    failures: list[BatchFailure] = field(default_factory=list)


class BatchIngestor:
    """Ingests many artifacts concurrently; one bad artifact never stops the rest."""

    def __init__(self, ingestor: Ingestor, max_workers: int = 4) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._ingestor = ingestor
        self._max_workers = max_workers

    def ingest_all(
        self,
        artifacts: Sequence[RawArtifact],
        owner: str,
        method: ClassificationMethod | None = None,
    ) -> BatchResult:
        result = BatchResult()
        if not artifacts:
            return result

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = {
                executor.submit(self._ingestor.ingest, artifact, owner, method): artifact
                for artifact in artifacts
            }
            for future in as_completed(futures):
                artifact = futures[future]
                try:
                    result.documents.append(future.result())
                except Exception as exc:
                    result.failures.append(BatchFailure(filename=artifact.filename, error=str(exc)))

        Log.info(
            f"Batch for {owner} finished: {len(result.documents)} ingested, "
            f"{len(result.failures)} failed"
        )
        return result
