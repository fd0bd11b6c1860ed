from dataclasses import dataclass
from enum import Enum


class ClassificationMethod(str, Enum):
    LEXICAL = "lexical"
    STRUCTURAL = "structural"
    EXTERNAL = "external"
    HYBRID = "hybrid"
    ENSEMBLE = "ensemble"


@dataclass(frozen=True)
class ClassificationResult:
    category: str
    subcategory: str
    confidence: float
    algorithm: str
    keywords: tuple[str, ...] = ()


@dataclass(frozen=True)
class InferenceLabel:
    """Raw answer of an external inference provider, before taxonomy mapping."""

    label: str
    score: float
