# app/api/deps.py
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.errors import UnauthenticatedError
from app.services.catalog import get_catalog
from app.services.notification_service import NotificationService
from app.services.session_store import SessionStore

bearer = HTTPBearer(auto_error=False)

_session_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    #jeden klient redisa na proces, redis-py ma wlasny pool polaczen
    global _session_store
    if _session_store is None:
        _session_store = SessionStore()
    return _session_store


def get_notifier() -> NotificationService:
    return NotificationService()


def get_catalog_dep(db: Session = Depends(get_db)):
    return get_catalog(db)


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> str:
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError()
    return credentials.credentials


def get_current_user_id(
    token: str = Depends(get_bearer_token),
    sessions: SessionStore = Depends(get_session_store),
) -> int:
    user_id = sessions.resolve(token)
    if user_id is None:
        raise UnauthenticatedError("Sesja wygasla albo jest niepoprawna")
    return user_id
