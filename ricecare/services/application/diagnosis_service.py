"""
Application service: Orchestration layer for leaf image diagnosis.
"""
import asyncio
import logging
from typing import Optional, Tuple

from ricecare.domain.models import ClassificationResult, Treatment
from ricecare.domain.treatments import get_treatment
from ricecare.infrastructure.model_host import ModelHost
from ricecare.services.domain.classification_decoder import ClassificationDecoder
from ricecare.services.domain.tensor_builder import TensorBuilder

logger = logging.getLogger(__name__)


class DiagnosisService:
    """
    Application service for leaf image classification.
    
    Coordinates the tensor builder, the shared model host and the decoder.
    Errors from any stage are propagated unchanged.
    """
    
    def __init__(
        self,
        model_host: ModelHost,
        tensor_builder: Optional[TensorBuilder] = None,
        decoder: Optional[ClassificationDecoder] = None,
    ):
        """
        Initialize the service with dependencies.
        
        Args:
            model_host: Shared inference session owner
            tensor_builder: Image decoder and normalizer
            decoder: Output vector decoder
        """
        self.model_host = model_host
        self.tensor_builder = tensor_builder or TensorBuilder()
        self.decoder = decoder or ClassificationDecoder()
    
    async def classify(self, image_bytes: bytes) -> ClassificationResult:
        """
        Classify one leaf image.
        
        Raises:
            DecodeError: If the image cannot be decoded
            ModelLoadError: If the model is not loaded and loading fails
            InferenceError: If model execution fails
        """
        tensor = await asyncio.to_thread(self.tensor_builder.build, image_bytes)
        scores = await self.model_host.run(tensor)
        result = self.decoder.decode(scores)
        
        logger.info(f"Classified leaf as {result.label.value} (confidence={result.confidence:.4f})")
        return result
    
    async def diagnose(self, image_bytes: bytes) -> Tuple[ClassificationResult, Treatment]:
        """Classify one leaf image and attach the matching treatment advice."""
        result = await self.classify(image_bytes)
        return result, get_treatment(result.label)
