"""Display grouping for symptom types. Not used by the correlation engine."""
import enum
from typing import Dict

from flarefood.models.symptom import SymptomType


class SymptomCategory(str, enum.Enum):
    DIGESTIVE = "Digestive"
    SKIN = "Skin"
    NEUROLOGICAL = "Neurological"
    RESPIRATORY = "Respiratory"
    MUSCULOSKELETAL = "Musculoskeletal"
    OTHER = "Other"


_GROUPS = {
    SymptomCategory.DIGESTIVE: [
        SymptomType.BLOATING,
        SymptomType.GAS_AND_FLATULENCE,
        SymptomType.STOMACH_PAIN,
        SymptomType.NAUSEA,
        SymptomType.DIARRHEA,
        SymptomType.CONSTIPATION,
        SymptomType.HEARTBURN,
        SymptomType.INDIGESTION,
    ],
    SymptomCategory.SKIN: [
        SymptomType.RASH,
        SymptomType.HIVES,
        SymptomType.ECZEMA_FLARE,
        SymptomType.ACNE,
        SymptomType.ITCHING,
        SymptomType.DRYNESS,
    ],
    SymptomCategory.NEUROLOGICAL: [
        SymptomType.HEADACHE,
        SymptomType.MIGRAINE,
        SymptomType.BRAIN_FOG,
        SymptomType.DIZZINESS,
        SymptomType.FATIGUE,
        SymptomType.INSOMNIA,
    ],
    SymptomCategory.RESPIRATORY: [
        SymptomType.CONGESTION,
        SymptomType.COUGHING,
        SymptomType.SHORTNESS_OF_BREATH,
        SymptomType.WHEEZING,
    ],
    SymptomCategory.MUSCULOSKELETAL: [
        SymptomType.JOINT_PAIN,
        SymptomType.MUSCLE_ACHES,
        SymptomType.STIFFNESS,
        SymptomType.INFLAMMATION,
    ],
    SymptomCategory.OTHER: [
        SymptomType.MOOD_CHANGES,
        SymptomType.ANXIETY,
        SymptomType.OTHER,
    ],
}

SYMPTOM_CATEGORIES: Dict[SymptomType, SymptomCategory] = {
    symptom_type: category
    for category, members in _GROUPS.items()
    for symptom_type in members
}


def category_for(symptom_type: SymptomType) -> SymptomCategory:
    return SYMPTOM_CATEGORIES.get(symptom_type, SymptomCategory.OTHER)
