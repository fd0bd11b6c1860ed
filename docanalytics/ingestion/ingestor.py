import uuid
from pathlib import Path

from docanalytics.classification.classifier import Classifier, build_classifier
from docanalytics.classification.exceptions import InferenceUnavailableError
from docanalytics.classification.inference.base import BaseInferenceClient
from docanalytics.classification.inference.factory import InferenceClientFactory
from docanalytics.classification.models import ClassificationMethod
from docanalytics.classification.taxonomy import load_taxonomy
from docanalytics.config.settings import Settings
from docanalytics.extraction.extractor import Extractor, build_extractor
from docanalytics.extraction.models import RawArtifact
from docanalytics.ingestion.pipeline import IngestionContext, PipelineStep
from docanalytics.ingestion.steps import (
    ClassifyStep,
    ExtractStep,
    PersistStep,
    RemoveBlobStep,
    StoreBlobStep,
)
from docanalytics.logging.logger import Log
from docanalytics.store.base import BlobStore, DocumentStore
from docanalytics.store.models import IndexedDocument


class Ingestor:
    """Runs one artifact through the ingestion steps.

    Pipeline: store blob -> extract -> classify -> persist. On any failure the
    failed step runs and the error is re-raised.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def ingest(
        self,
        artifact: RawArtifact,
        owner: str,
        method: ClassificationMethod | None = None,
    ) -> IndexedDocument:
        context = IngestionContext(
            artifact=artifact,
            owner=owner,
            document_id=uuid.uuid4().hex,
            method=method,
        )
        Log.info(f"Ingesting '{artifact.filename}' for {owner} as {context.document_id}")
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            context.error_message = str(exc)
            self._failed_step.run(context)
            raise

        if context.document is None:
            raise RuntimeError("Ingestion pipeline finished without a document")
        return context.document


def build_inference_client(settings: Settings) -> BaseInferenceClient | None:
    """Create the configured inference client; a missing credential disables it."""
    try:
        return InferenceClientFactory.create(settings)
    except InferenceUnavailableError as exc:
        Log.warning(
            f"External inference disabled: {exc}",
            event="classification_degraded",
            provider=settings.inference_provider,
        )
        return None


def build_default_classifier(settings: Settings) -> Classifier:
    taxonomy_path = Path(settings.taxonomy_path) if settings.taxonomy_path else None
    return build_classifier(
        load_taxonomy(taxonomy_path),
        build_inference_client(settings),
        settings.classification_method,
        settings.inference_max_chars,
    )


def build_ingestor(
    settings: Settings,
    store: DocumentStore,
    blob_store: BlobStore,
    extractor: Extractor | None = None,
    classifier: Classifier | None = None,
) -> Ingestor:
    """Build an Ingestor with the default step chain."""
    extractor = extractor or build_extractor(settings)
    classifier = classifier or build_default_classifier(settings)
    return Ingestor(
        steps=[
            StoreBlobStep(blob_store),
            ExtractStep(extractor),
            ClassifyStep(classifier),
            PersistStep(store),
        ],
        failed_step=RemoveBlobStep(blob_store),
    )
