"""
Domain service: Map raw classifier scores to a severity label.
"""
import logging
from typing import Sequence

from ricecare.domain.models import ClassificationResult, SeverityLabel

logger = logging.getLogger(__name__)

# Output index order of the leaf classifier graph
LABELS: tuple[SeverityLabel, ...] = (
    SeverityLabel.SEVERITY_0,
    SeverityLabel.SEVERITY_1,
    SeverityLabel.SEVERITY_3,
    SeverityLabel.SEVERITY_5,
    SeverityLabel.SEVERITY_7,
    SeverityLabel.SEVERITY_9,
    SeverityLabel.UNKNOWN,
)


def label_for_index(index: int) -> SeverityLabel:
    """Bounds-checked label lookup; anything outside the vocabulary is UNKNOWN."""
    if 0 <= index < len(LABELS):
        return LABELS[index]
    return SeverityLabel.UNKNOWN


class ClassificationDecoder:
    """
    Argmax decoder for the leaf classifier output.

    Ties go to the first index holding the maximum. The confidence is the
    raw winning score, which may be a logit rather than a probability;
    it is passed through unchanged.
    """

    def decode(self, scores: Sequence[float]) -> ClassificationResult:
        """
        Decode an output vector.

        Args:
            scores: Flat class-score vector from the model

        Returns:
            ClassificationResult with label and raw confidence
        """
        max_value = float("-inf")
        max_index = -1

        for index, value in enumerate(scores):
            value = float(value)
            if value > max_value:
                max_value = value
                max_index = index

        if len(scores) != len(LABELS):
            logger.warning(
                f"Model returned {len(scores)} scores for {len(LABELS)} labels"
            )

        label = label_for_index(max_index)
        logger.debug(f"Decoded index {max_index} -> {label.value} ({max_value:.4f})")

        return ClassificationResult(label=label, confidence=max_value)
