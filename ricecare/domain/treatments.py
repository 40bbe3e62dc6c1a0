"""
Treatment advice per leaf severity class.
"""
from ricecare.domain.models import SeverityLabel, Treatment


TREATMENTS: dict[SeverityLabel, Treatment] = {
    SeverityLabel.SEVERITY_0: Treatment(
        title="Healthy Plant",
        description="No signs of disease detected. The plant appears vigorous.",
        treatment=[
            "Continue regular monitoring.",
            "Maintain optimal water levels.",
            "Ensure proper nutrient balance.",
        ],
    ),
    SeverityLabel.SEVERITY_1: Treatment(
        title="Very Low Infection",
        description="Minor spots or discoloration detected (Severity 1).",
        treatment=[
            "Monitor the spreading of spots closely.",
            "Check for nutrient deficiencies (Nitrogen/Potassium).",
            "Keep the field weed-free.",
        ],
    ),
    SeverityLabel.SEVERITY_3: Treatment(
        title="Low Infection",
        description="Visible lesions appearing on some leaves (Severity 3).",
        treatment=[
            "Avoid excessive Nitrogen application.",
            "Improve air circulation if possible.",
            "Consider mild preventive fungicides if weather favors disease.",
        ],
    ),
    SeverityLabel.SEVERITY_5: Treatment(
        title="Moderate Infection",
        description="Significant lesions affecting photosynthesis (Severity 5).",
        treatment=[
            "Remove and destroy heavily infected leaves.",
            "Ensure field drainage is adequate.",
            "Apply recommended fungicides (e.g., Copper-based) if spreading.",
        ],
    ),
    SeverityLabel.SEVERITY_7: Treatment(
        title="High Infection",
        description="Large areas of leaves are damaged (Severity 7). Yield loss risk.",
        treatment=[
            "Immediate chemical control is likely needed.",
            "Consult local agricultural officer.",
            "Drain field water for 2-3 days to reduce humidity.",
        ],
    ),
    SeverityLabel.SEVERITY_9: Treatment(
        title="Severe Infection",
        description="Critical damage to the crop (Severity 9). High risk of major yield loss.",
        treatment=[
            "Harvest immediately if crop is mature.",
            "Burn/bury infected stubble after harvest.",
            "Do not use seeds from this field for next season.",
        ],
    ),
    SeverityLabel.UNKNOWN: Treatment(
        title="Unknown Condition",
        description="The image analysis was inconclusive.",
        treatment=[
            "Try scanning again with better lighting.",
            "Ensure the image is focused on the leaf.",
        ],
    ),
}


def get_treatment(label: str) -> Treatment:
    """Return the advice for a label, falling back to the unknown entry."""
    try:
        return TREATMENTS[SeverityLabel(label)]
    except ValueError:
        return TREATMENTS[SeverityLabel.UNKNOWN]
