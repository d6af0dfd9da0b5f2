# Importing every model registers it on Base.metadata before mappers are configured
from .user import User
from .project import Project, project_members
from .task import Task
from .comment import Comment
