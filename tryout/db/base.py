from tryout.db.base_class import Base

# Import every model so Base.metadata knows all tables (alembic + create_all)
from tryout.models.user import User
from tryout.models.classroom import Classroom
from tryout.models.package import Package, Subtest
from tryout.models.question import Answer, Question
from tryout.models.quiz_session import QuizSession
from tryout.models.user_answer import UserAnswer
from tryout.models.site_setting import SiteSetting
from tryout.models.resource import File, Folder
