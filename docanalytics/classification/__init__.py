from docanalytics.classification.classifier import Classifier, build_classifier
from docanalytics.classification.models import ClassificationMethod, ClassificationResult
from docanalytics.classification.taxonomy import DEFAULT_TAXONOMY, Taxonomy, load_taxonomy

__all__ = [
    "DEFAULT_TAXONOMY",
    "ClassificationMethod",
    "ClassificationResult",
    "Classifier",
    "Taxonomy",
    "build_classifier",
    "load_taxonomy",
]
