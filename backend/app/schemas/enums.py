from enum import Enum


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class ExerciseType(str, Enum):
    RUNNING = "running"
    WALKING = "walking"
    CYCLING = "cycling"
    SWIMMING = "swimming"
    GYM = "gym"
    YOGA = "yoga"
    OTHER = "other"


class ExerciseIntensity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SleepQuality(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class GoalType(str, Enum):
    WEIGHT = "weight"
    CALORIES = "calories"
    EXERCISE = "exercise"
    SLEEP = "sleep"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"


class ActivityKind(str, Enum):
    DIET = "diet"
    EXERCISE = "exercise"


# Units shown next to goal targets
GOAL_UNITS: dict[GoalType, str] = {
    GoalType.WEIGHT: "kg",
    GoalType.CALORIES: "kcal",
    GoalType.EXERCISE: "min",
    GoalType.SLEEP: "h",
}
