"""Validates a parsed provider answer and builds an InferenceLabel."""

from typing import Any

from docanalytics.classification.exceptions import InferenceResponseError
from docanalytics.classification.models import InferenceLabel


def validate_and_build(data: Any) -> InferenceLabel:
    """Raises InferenceResponseError when label or score is missing or malformed."""
    if not isinstance(data, dict):
        raise InferenceResponseError("Response must be an object")
    label = data.get("label")
    if not isinstance(label, str) or not label.strip():
        raise InferenceResponseError("'label' must be a non-empty string")
    score = data.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise InferenceResponseError("'score' must be a number")
    return InferenceLabel(label=label.strip(), score=float(score))
