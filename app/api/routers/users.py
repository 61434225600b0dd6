from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_bearer_token, get_current_user_id, get_session_store
from app.data.database import get_db
from app.domain.schemas import RegisterIn, RegisterOut, LoginIn, LoginOut, ProfileOut
from app.services.profile_service import ProfileService
from app.services.session_store import SessionStore
from app.services.user_service import UserService

router = APIRouter(tags=["users"])


@router.post("/register", response_model=RegisterOut, status_code=201)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    user = UserService(db).register(payload.username, payload.email, payload.password)
    return {"message": "Uzytkownik zarejestrowany", "user": user}


@router.post("/login", response_model=LoginOut)
def login(
    payload: LoginIn,
    db: Session = Depends(get_db),
    sessions: SessionStore = Depends(get_session_store),
):
    user = UserService(db).authenticate(payload.username, payload.password)
    token = sessions.create(user["id"])
    return {"message": "Zalogowano", "token": token, "user": user}


@router.post("/logout")
def logout(
    token: str = Depends(get_bearer_token),
    sessions: SessionStore = Depends(get_session_store),
):
    sessions.revoke(token)
    return {"message": "Wylogowano"}


@router.get("/users", response_model=List[str])
def list_users(db: Session = Depends(get_db)):
    return UserService(db).list_usernames()


@router.get("/users/{user_id}", response_model=ProfileOut)
def get_profile(
    user_id: int,
    current_user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return ProfileService(db).get_profile(user_id, current_user_id)
