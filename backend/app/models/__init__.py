# SQLAlchemy Models
from app.models.user import User
from app.models.profile import Profile
from app.models.diet import DietEntry
from app.models.exercise import ExerciseEntry
from app.models.sleep import SleepEntry
from app.models.weight import WeightEntry
from app.models.goal import Goal

__all__ = [
    "User",
    "Profile",
    "DietEntry",
    "ExerciseEntry",
    "SleepEntry",
    "WeightEntry",
    "Goal",
]
