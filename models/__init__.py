from models.profile import Profile, PROFILE_ID, TOKEN_FIELDS
from models.skill import Skill
from models.education import Education
from models.goal import Goal, GoalStatus

__all__ = [
    "Profile",
    "PROFILE_ID",
    "TOKEN_FIELDS",
    "Skill",
    "Education",
    "Goal",
    "GoalStatus",
]
