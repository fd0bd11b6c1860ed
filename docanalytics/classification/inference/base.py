from abc import ABC, abstractmethod
from collections.abc import Sequence

from docanalytics.classification.models import InferenceLabel


class BaseInferenceClient(ABC):
    """Contract for external document classification providers."""

    name: str = "external"

    @abstractmethod
    def classify(self, text: str, *, labels: Sequence[str]) -> InferenceLabel:
        """Ask the provider which of ``labels`` best describes ``text``.

        Raises:
            InferenceUnavailableError: on network failure, timeout or missing credentials.
            InferenceResponseError: if the provider's answer cannot be used.
        """
