from fastapi import Request

from simplylearn.core.mailer import Mailer
from simplylearn.core.uploads import UploadStore


# every request that needs DB will get a fresh session, and it will always close.
def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer


def get_upload_store(request: Request) -> UploadStore:
    return request.app.state.upload_store
