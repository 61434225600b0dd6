import pytest
import redis

from app.domain.errors import ValidationError, UnauthenticatedError, TransientStoreError
from app.services.session_store import SessionStore
from app.services.user_service import UserService, check_password


@pytest.fixture
def user_service(db):
    return UserService(db)


class TestRegister:
    def test_stores_bcrypt_hash(self, db, user_service):
        user = user_service.register("alice", "alice@example.com", "s3cret")

        assert user["username"] == "alice"
        stored = user_service.repo.get_user(user["id"])
        assert stored.password_hash != "s3cret"
        assert check_password("s3cret", stored.password_hash)
        db.rollback()

    @pytest.mark.parametrize(
        "username,email,password",
        [("", "a@example.com", "pw"), ("alice", "", "pw"), ("alice", "a@example.com", "")],
    )
    def test_all_fields_required(self, user_service, username, email, password):
        with pytest.raises(ValidationError):
            user_service.register(username, email, password)

    def test_email_format(self, user_service):
        with pytest.raises(ValidationError):
            user_service.register("alice", "not-an-email", "pw")

    @pytest.mark.parametrize("username,email", [("alice", "other@example.com"), ("other", "alice@example.com")])
    def test_duplicate_username_or_email(self, user_service, username, email):
        user_service.register("alice", "alice@example.com", "pw")

        with pytest.raises(ValidationError):
            user_service.register(username, email, "pw")


class TestAuthenticate:
    def test_valid_credentials(self, user_service):
        created = user_service.register("alice", "alice@example.com", "pw")

        assert user_service.authenticate("alice", "pw")["id"] == created["id"]

    def test_wrong_password_and_unknown_user_look_the_same(self, user_service):
        user_service.register("alice", "alice@example.com", "pw")

        with pytest.raises(UnauthenticatedError) as wrong:
            user_service.authenticate("alice", "nope")
        with pytest.raises(UnauthenticatedError) as unknown:
            user_service.authenticate("nobody", "pw")

        assert str(wrong.value) == str(unknown.value)

    def test_list_usernames(self, user_service):
        user_service.register("alice", "alice@example.com", "pw")
        user_service.register("bob", "bob@example.com", "pw")

        assert user_service.list_usernames() == ["alice", "bob"]


class TestSessionStore:
    def test_create_resolve_revoke(self, fake_redis):
        store = SessionStore(client=fake_redis, ttl=60)

        token = store.create(7)

        assert store.resolve(token) == 7
        assert fake_redis.ttls[f"session:{token}"] == 60
        assert store.revoke(token) is True
        assert store.resolve(token) is None

    def test_unknown_token(self, fake_redis):
        assert SessionStore(client=fake_redis).resolve("missing") is None

    def test_redis_down_is_transient(self):
        class DownRedis:
            def get(self, name):
                raise redis.ConnectionError("refused")

        with pytest.raises(TransientStoreError):
            SessionStore(client=DownRedis()).resolve("token")
