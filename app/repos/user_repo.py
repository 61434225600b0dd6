from sqlalchemy import select, or_
from sqlalchemy.orm import Session
from app.data.models.user import UserModel

class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_by_username(self, username: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.username == username)
        ).scalar_one_or_none()

    def exists(self, username: str, email: str) -> bool:
        found = self.db.execute(
            select(UserModel.id).where(
                or_(UserModel.username == username, UserModel.email == email)
            )
        ).first()
        return found is not None

    def list_usernames(self) -> list[str]:
        return list(
            self.db.execute(select(UserModel.username).order_by(UserModel.id)).scalars()
        )

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.flush()
        return user
