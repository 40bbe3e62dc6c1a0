"""
API router for leaf diagnosis endpoints.
"""
from typing import Annotated
from fastapi import APIRouter, File, Path, Request, UploadFile

from ricecare.api.dependencies import DiagnosisServiceDep
from ricecare.api.rate_limit import DEFAULT_LIMIT, limiter
from ricecare.api.v1.models.responses import ClassificationResponse
from ricecare.domain.models import Treatment
from ricecare.domain.treatments import get_treatment


router = APIRouter(
    prefix="/diagnosis",
    tags=["diagnosis"],
)


@router.post(
    "/classify",
    response_model=ClassificationResponse,
    summary="Classify a leaf image",
    description="""
    Classify a rice leaf photo into a severity class.
    
    The image must already be cropped and resized to the model input size
    (224x224). The returned confidence is the raw winning model score and
    is not guaranteed to be a probability.
    """,
    responses={
        422: {"description": "Image could not be decoded"},
        429: {"description": "Rate limit exceeded"},
        500: {"description": "Inference failed"},
        503: {"description": "Model could not be loaded"},
    }
)
@limiter.limit(DEFAULT_LIMIT)
async def classify_leaf(
    request: Request,
    file: Annotated[UploadFile, File(description="JPEG or PNG leaf image")],
    diagnosis_service: DiagnosisServiceDep,
) -> ClassificationResponse:
    """
    Classify an uploaded leaf image.
    
    Decode, model and inference errors propagate to the error middleware.
    """
    image_bytes = await file.read()
    result, treatment = await diagnosis_service.diagnose(image_bytes)
    
    return ClassificationResponse(
        label=result.label,
        confidence=result.confidence,
        treatment=treatment,
    )


@router.get(
    "/treatments/{label}",
    response_model=Treatment,
    summary="Get treatment advice",
)
async def get_treatment_advice(
    label: Annotated[str, Path(description="Severity label, e.g. severity_5")],
) -> Treatment:
    """Return treatment advice for a label; unrecognized labels get the unknown advice."""
    return get_treatment(label)
