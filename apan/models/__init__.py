# apan/models/__init__.py
# Importing every model registers it in Base.metadata before create_all.
from apan.models.user import User  # noqa: F401
from apan.models.project import Project, ProjectStudent  # noqa: F401
from apan.models.goal import ProjectGoal, GoalProgress  # noqa: F401
from apan.models.action import ProjectAction  # noqa: F401
