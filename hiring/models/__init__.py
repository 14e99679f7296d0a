from .user import User, Role
from .application import Application, ApplicationStatus, ApplicationResult
from .rubric import Rubric, RubricState
from .score import Score
from .notification import Notification, NotificationType
from .pre_employment import PreEmploymentRequirement
