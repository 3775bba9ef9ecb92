"""Blood pressure categories (ACC/AHA thresholds) and per-category recommendations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BPCategory:
    name: str
    description: str
    risk: str


CATEGORY_NORMAL = BPCategory("Normal", "Blood pressure in normal range", "low")
CATEGORY_ELEVATED = BPCategory("Elevated", "Blood pressure is slightly high", "moderate")
CATEGORY_STAGE1 = BPCategory("Hypertension Stage 1", "Blood pressure is high", "high")
CATEGORY_STAGE2 = BPCategory("Hypertension Stage 2", "Blood pressure is very high", "very high")
CATEGORY_CRISIS = BPCategory("Hypertensive Crisis", "Seek emergency medical attention", "severe")

RECOMMENDATIONS: dict[str, str] = {
    CATEGORY_NORMAL.name: "Maintain a healthy lifestyle with regular exercise and balanced diet.",
    CATEGORY_ELEVATED.name: (
        "Consider lifestyle changes including reduced sodium intake and regular exercise. "
        "Monitor BP regularly."
    ),
    CATEGORY_STAGE1.name: "Consult your healthcare provider. Lifestyle changes and possibly medication may be needed.",
    CATEGORY_STAGE2.name: (
        "Consult your healthcare provider promptly. Medication is likely needed along with lifestyle changes."
    ),
    CATEGORY_CRISIS.name: "SEEK EMERGENCY MEDICAL ATTENTION IMMEDIATELY!",
}


def classify_bp(systolic: int, diastolic: int) -> BPCategory:
    """Most severe category first; either number alone can raise the category."""
    if systolic > 180 or diastolic > 120:
        return CATEGORY_CRISIS
    if systolic >= 140 or diastolic >= 90:
        return CATEGORY_STAGE2
    if systolic >= 130 or diastolic >= 80:
        return CATEGORY_STAGE1
    if systolic >= 120 and diastolic < 80:
        return CATEGORY_ELEVATED
    return CATEGORY_NORMAL


def get_recommendation(category: BPCategory) -> str:
    recommendation = RECOMMENDATIONS.get(category.name)
    if recommendation is None:
        return f"Unknown category: {category.name}. Please consult your healthcare provider."
    return recommendation
