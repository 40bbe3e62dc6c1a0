"""
Static weather-threshold profiles for monitored rice diseases and pests.
"""
from types import MappingProxyType
from typing import Mapping

from ricecare.domain.models import DiseaseProfile, ThreatType


_PROFILES = [
    DiseaseProfile(
        code="RB", name="Rice Blast", type=ThreatType.DISEASE,
        temp_min=22, temp_max=30, rh_min=85, rain_min=2,
        dewpoint_min=19, dewpoint_max=24, leaf_wetness_min=8, consecutive_days=1,
    ),
    DiseaseProfile(
        code="BLB", name="Bacterial Leaf Blight", type=ThreatType.DISEASE,
        temp_min=25, temp_max=34, rh_min=80, rain_min=2,
        dewpoint_min=22, dewpoint_max=24, leaf_wetness_min=6, consecutive_days=3,
    ),
    DiseaseProfile(
        code="SB", name="Sheath Blight", type=ThreatType.DISEASE,
        temp_min=26, temp_max=34, rh_min=90, rain_min=2,
        dewpoint_min=21, dewpoint_max=27, leaf_wetness_min=8, consecutive_days=2,
    ),
    DiseaseProfile(
        code="GM", name="Gall Midge", type=ThreatType.PEST,
        temp_min=20, temp_max=30, rh_min=85, rain_min=0,
        dewpoint_min=20, dewpoint_max=26, leaf_wetness_min=0, consecutive_days=1,
    ),
    DiseaseProfile(
        code="BS", name="Brown Spot", type=ThreatType.DISEASE,
        temp_min=24, temp_max=30, rh_min=80, rain_min=2,
        dewpoint_min=20, dewpoint_max=25, leaf_wetness_min=8, consecutive_days=3,
    ),
    DiseaseProfile(
        code="YSB", name="Yellow Stem Borer", type=ThreatType.PEST,
        temp_min=22, temp_max=34, rh_min=80, rain_min=0,
        dewpoint_min=20, dewpoint_max=26, leaf_wetness_min=0, consecutive_days=1,
    ),
    DiseaseProfile(
        code="LF", name="Leaf Folder", type=ThreatType.PEST,
        temp_min=25, temp_max=32, rh_min=70, rain_min=0,
        dewpoint_min=20, dewpoint_max=27, leaf_wetness_min=0, consecutive_days=1,
    ),
    DiseaseProfile(
        code="BPH", name="Brown Plant Hopper", type=ThreatType.PEST,
        temp_min=25, temp_max=32, rh_min=70, rain_min=0,
        dewpoint_min=20, dewpoint_max=27, leaf_wetness_min=0, consecutive_days=1,
    ),
]

# Canonical monitoring order, used when a caller does not pick diseases
DISEASE_LIST: tuple[str, ...] = tuple(p.code for p in _PROFILES)

DISEASE_PROFILES: Mapping[str, DiseaseProfile] = MappingProxyType(
    {p.code: p for p in _PROFILES}
)


def get_profile(code: str) -> DiseaseProfile | None:
    """Look up a profile by code; unknown codes return None."""
    return DISEASE_PROFILES.get(code)
