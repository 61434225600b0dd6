import re

import bcrypt
from sqlalchemy.orm import Session

from app.data.models.user import UserModel
from app.data.transaction import unit_of_work
from app.domain.errors import ValidationError, UnauthenticatedError
from app.repos.user_repo import UserRepo
from app.utils.settings import BCRYPT_ROUNDS
from app.utils.logging import get_logger

logger = get_logger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def serialize_user(user: UserModel) -> dict:
    return {"id": user.id, "username": user.username, "email": user.email}


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepo(db)

    def register(self, username: str, email: str, password: str) -> dict:
        if not username or not email or not password:
            raise ValidationError("Wszystkie pola sa wymagane")

        if not EMAIL_RE.match(email):
            raise ValidationError("Niepoprawny format email")

        with unit_of_work(self.db):
            if self.repo.exists(username, email):
                raise ValidationError("Nazwa uzytkownika albo email juz istnieje")

            user = self.repo.create_user(
                UserModel(
                    username=username,
                    email=email,
                    password_hash=hash_password(password),
                )
            )
            created = serialize_user(user)

        logger.info(f"Zarejestrowano uzytkownika {created['id']}")
        return created

    def authenticate(self, username: str, password: str) -> dict:
        with unit_of_work(self.db):
            user = self.repo.get_by_username(username)
            # ten sam komunikat dla zlego loginu i hasla
            if not user or not check_password(password, user.password_hash):
                raise UnauthenticatedError("Niepoprawny login lub haslo")
            found = serialize_user(user)

        return found

    def list_usernames(self) -> list[str]:
        with unit_of_work(self.db):
            return self.repo.list_usernames()
