from tryout.models.user import User
from tryout.models.classroom import Classroom
from tryout.models.package import Package, PackageType, Subtest, SubtestType
from tryout.models.question import Answer, Question, QuestionType
from tryout.models.quiz_session import QuizSession
from tryout.models.user_answer import UserAnswer
from tryout.models.site_setting import SiteSetting
from tryout.models.resource import File, Folder

__all__ = [
    "User",
    "Classroom",
    "Package",
    "PackageType",
    "Subtest",
    "SubtestType",
    "Question",
    "QuestionType",
    "Answer",
    "QuizSession",
    "UserAnswer",
    "SiteSetting",
    "Folder",
    "File",
]
