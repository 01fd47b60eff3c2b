import enum

from sqlalchemy import Column, Integer, Text, DateTime, Enum, Float, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import validates

from flarefood.database import Base


class SymptomType(str, enum.Enum):
    """Closed set of symptom types the correlation engine iterates over."""
    # Digestive
    BLOATING = "Bloating"
    GAS_AND_FLATULENCE = "Gas/Flatulence"
    STOMACH_PAIN = "Stomach Pain"
    NAUSEA = "Nausea"
    DIARRHEA = "Diarrhea"
    CONSTIPATION = "Constipation"
    HEARTBURN = "Heartburn"
    INDIGESTION = "Indigestion"
    # Skin
    RASH = "Rash"
    HIVES = "Hives"
    ECZEMA_FLARE = "Eczema Flare"
    ACNE = "Acne"
    ITCHING = "Itching"
    DRYNESS = "Dryness"
    # Neurological
    HEADACHE = "Headache"
    MIGRAINE = "Migraine"
    BRAIN_FOG = "Brain Fog"
    DIZZINESS = "Dizziness"
    FATIGUE = "Fatigue"
    INSOMNIA = "Insomnia"
    # Respiratory
    CONGESTION = "Congestion"
    COUGHING = "Coughing"
    SHORTNESS_OF_BREATH = "Shortness of Breath"
    WHEEZING = "Wheezing"
    # Musculoskeletal
    JOINT_PAIN = "Joint Pain"
    MUSCLE_ACHES = "Muscle Aches"
    STIFFNESS = "Stiffness"
    INFLAMMATION = "Inflammation"
    # Other
    MOOD_CHANGES = "Mood Changes"
    ANXIETY = "Anxiety"
    OTHER = "Other"


class Symptom(Base):
    """Logged symptom occurrence with a 0-10 severity."""

    __tablename__ = "symptoms"

    id = Column(Integer, primary_key=True)
    timestamp = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    symptom_type = Column(Enum(SymptomType), nullable=False, default=SymptomType.OTHER)
    severity = Column(Float, nullable=False)  # 0.0-10.0
    duration_minutes = Column(Integer, nullable=True)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("idx_symptoms_timestamp", "timestamp"),
        Index("idx_symptoms_symptom_type", "symptom_type"),
    )

    @validates("severity")
    def clamp_severity(self, key, value):
        return max(0.0, min(10.0, float(value)))
