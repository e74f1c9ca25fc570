from typing import Iterator

from fastapi import Request
from sqlalchemy.orm import Session, sessionmaker


def get_session_factory(request: Request) -> sessionmaker:
    return request.app.state.session_factory


def get_db(request: Request) -> Iterator[Session]:
    db = get_session_factory(request)()
    try:
        yield db
    finally:
        db.close()
