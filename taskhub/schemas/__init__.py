from .user import UserRef, UserOut, UserCreate, UserLogin, UserUpdate, ProfileUpdate, PasswordUpdate
from .tokens import Token
from .project import ProjectRef, ProjectOut, ProjectCreate, ProjectUpdate, ProjectMemberAdd, ProjectMembers
from .task import TaskOut, TaskCreate, TaskUpdate, TaskListWithStats
from .comment import CommentOut, CommentCreate, CommentTaskCreate, CommentUpdate
