import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from simplylearn.core import config
from simplylearn.core.errors import register_error_handlers
from simplylearn.core.logging_middleware import LoggingMiddleware
from simplylearn.core.mailer import Mailer
from simplylearn.core.uploads import UploadStore
from simplylearn.db.init_db import init_db
from simplylearn.db.session import build_engine, build_session_factory
from simplylearn.routers.assignments import router as assignments_router
from simplylearn.routers.auth import router as auth_router
from simplylearn.routers.courses import router as courses_router
from simplylearn.routers.dashboard import router as dashboard_router
from simplylearn.routers.enrollments import router as enrollments_router
from simplylearn.routers.forum import router as forum_router
from simplylearn.routers.quizzes import router as quizzes_router
from simplylearn.routers.submissions import router as submissions_router

logging.basicConfig(level=logging.INFO)

logger = logging.getLogger(__name__)


def create_app(
    database_url: Optional[str] = None,
    upload_dir: Optional[str] = None,
    mailer: Optional[Mailer] = None,
) -> FastAPI:
    """Serve with ``uvicorn --factory simplylearn.main:create_app``."""
    app = FastAPI(title="SimplyLearn API")

    # Collaborators built once and shared through app.state
    engine = build_engine(database_url or config.DATABASE_URL)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.upload_store = UploadStore(upload_dir or config.UPLOAD_DIR)
    app.state.mailer = mailer or Mailer.from_config()

    # Middleware
    app.add_middleware(LoggingMiddleware)
    register_error_handlers(app)

    # Health check
    @app.get("/health")
    def health():
        return {"status": "ok"}

    # Startup event
    @app.on_event("startup")
    def on_startup():
        init_db(engine)
        logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))

    # Include routers
    app.include_router(auth_router, prefix="/auth", tags=["auth"])
    app.include_router(courses_router, prefix="/courses", tags=["courses"])
    app.include_router(enrollments_router, prefix="/enrollments", tags=["enrollments"])
    app.include_router(assignments_router, prefix="/assignments", tags=["assignments"])
    app.include_router(submissions_router, prefix="/submissions", tags=["submissions"])
    app.include_router(quizzes_router, prefix="/quizzes", tags=["quizzes"])
    app.include_router(forum_router, prefix="/forum", tags=["forum"])
    app.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])

    # Uploaded submission files
    app.mount(
        config.UPLOAD_URL_PREFIX,
        StaticFiles(directory=str(app.state.upload_store.root)),
        name="uploads",
    )

    return app

