from starlaunch.db.models.participation import Participation
from starlaunch.db.models.project import Project
from starlaunch.db.models.user import User

__all__ = [
    "Participation",
    "Project",
    "User",
]
