from simplylearn.db.base_class import Base  # noqa: F401

# import models so SQLAlchemy registers them on Base.metadata
from simplylearn.models import (  # noqa: F401
    assignment,
    course,
    enrollment,
    forum,
    quiz,
    submission,
    user,
)
