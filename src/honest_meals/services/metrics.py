"""Energy, macro and BMI calculations.

Every function here is pure arithmetic and total over finite input. Values
outside the advisory biometric ranges are not rejected; degenerate input
(for example a height of 0) yields ``inf`` or ``nan`` instead of raising,
so callers must check ``math.isfinite`` before display.
"""

import math

from honest_meals.domain.health import (
    ActivityLevel,
    BiometricInput,
    BmiCategory,
    Gender,
    Goal,
    MacroTargets,
    MetricsSnapshot,
)

ACTIVITY_FACTORS: dict[str, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}
DEFAULT_ACTIVITY_FACTOR = ACTIVITY_FACTORS[ActivityLevel.SEDENTARY]

# Fixed daily offset, roughly 0.45 kg of body weight per week.
GOAL_CALORIE_OFFSET = 500

PROTEIN_G_PER_KG: dict[str, float] = {
    Goal.LOSE: 2.2,
    Goal.GAIN: 1.8,
    Goal.MAINTAIN: 1.6,
}
FAT_CALORIE_SHARE: dict[str, float] = {
    Goal.LOSE: 0.30,
    Goal.GAIN: 0.25,
    Goal.MAINTAIN: 0.30,
}

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

BMI_UNDERWEIGHT_BELOW = 18.5
BMI_NORMAL_BELOW = 25.0
BMI_OVERWEIGHT_BELOW = 30.0


def _round(value: float) -> int | float:
    """Round half up like the web client did, passing non-finite values through."""
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5)


def compute_bmr(
    gender: Gender | str, weight_kg: float, height_cm: float, age_years: float
) -> int:
    """Return basal metabolic rate in kcal/day using Mifflin-St Jeor."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
    if gender == Gender.MALE:
        return _round(base + 5)
    return _round(base - 161)


def compute_tdee(bmr: float, activity_level: ActivityLevel | str) -> int:
    """Scale BMR by the activity factor; unknown levels count as sedentary."""
    factor = ACTIVITY_FACTORS.get(activity_level, DEFAULT_ACTIVITY_FACTOR)
    return _round(bmr * factor)


def compute_target_calories(tdee: float, goal: Goal | str) -> int:
    """Apply the goal offset to TDEE."""
    if goal == Goal.LOSE:
        return _round(tdee - GOAL_CALORIE_OFFSET)
    if goal == Goal.GAIN:
        return _round(tdee + GOAL_CALORIE_OFFSET)
    return _round(tdee)


def compute_macros(
    target_calories: float, goal: Goal | str, weight_kg: float
) -> MacroTargets:
    """Split a calorie target into protein, carbs and fat grams.

    Protein scales with body weight, fat is a share of calories and carbs
    take whatever is left. Each value is rounded on its own, so the grams
    do not add back up to the target exactly. Carbs stay negative when
    protein and fat already exceed the target; see ``MacroTargets.is_feasible``.
    """
    if goal not in (Goal.LOSE, Goal.GAIN):
        goal = Goal.MAINTAIN
    protein = weight_kg * PROTEIN_G_PER_KG[goal]
    fat = target_calories * FAT_CALORIE_SHARE[goal] / KCAL_PER_G_FAT
    carbs = (
        target_calories - protein * KCAL_PER_G_PROTEIN - fat * KCAL_PER_G_FAT
    ) / KCAL_PER_G_CARBS
    return MacroTargets(
        protein_g=_round(protein),
        carbs_g=_round(carbs),
        fat_g=_round(fat),
    )


def compute_bmi(weight_kg: float, height_cm: float) -> float:
    """Return BMI rounded to one decimal place."""
    height_m = height_cm / 100
    try:
        bmi = weight_kg / (height_m * height_m)
    except ZeroDivisionError:
        if weight_kg == 0 or math.isnan(weight_kg):
            return math.nan
        return math.copysign(math.inf, weight_kg)
    if not math.isfinite(bmi):
        return bmi
    return math.floor(bmi * 10 + 0.5) / 10


def classify_bmi(bmi: float) -> BmiCategory:
    """Bucket a BMI value; each bound belongs to the higher bucket."""
    if bmi < BMI_UNDERWEIGHT_BELOW:
        return BmiCategory.UNDERWEIGHT
    if bmi < BMI_NORMAL_BELOW:
        return BmiCategory.NORMAL
    if bmi < BMI_OVERWEIGHT_BELOW:
        return BmiCategory.OVERWEIGHT
    return BmiCategory.OBESE


def calculate_snapshot(biometrics: BiometricInput) -> MetricsSnapshot:
    """Run the full calculation chain for one set of biometrics."""
    bmr = compute_bmr(
        biometrics.gender,
        biometrics.weight_kg,
        biometrics.height_cm,
        biometrics.age,
    )
    tdee = compute_tdee(bmr, biometrics.activity_level)
    target_calories = compute_target_calories(tdee, biometrics.goal)
    bmi = compute_bmi(biometrics.weight_kg, biometrics.height_cm)
    return MetricsSnapshot(
        bmr=bmr,
        tdee=tdee,
        target_calories=target_calories,
        macros=compute_macros(target_calories, biometrics.goal, biometrics.weight_kg),
        bmi=bmi,
        bmi_category=classify_bmi(bmi),
    )
