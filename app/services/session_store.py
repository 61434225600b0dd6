import secrets

import redis
from redis.exceptions import RedisError

from app.domain.errors import TransientStoreError
from app.utils.retry import redis_retry
from app.utils.settings import REDIS_URL, SESSION_TTL_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)


class SessionStore:
    """
    -sesje logowania w redisie: token -> user_id
    -TTL ustawia redis, nie trzeba recznie czyscic
    -wylogowanie kasuje klucz
    """

    def __init__(self, client=None, url: str | None = None, ttl: int = SESSION_TTL_SECONDS):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl

    @staticmethod
    def _key(token: str) -> str:
        return f"session:{token}"

    @redis_retry()
    def _set(self, key: str, value: str) -> None:
        self.redis.set(name=key, value=value, ex=self.ttl)

    @redis_retry()
    def _get(self, key: str) -> str | None:
        return self.redis.get(key)

    @redis_retry()
    def _delete(self, key: str) -> int:
        return self.redis.delete(key)

    def create(self, user_id: int) -> str:
        token = secrets.token_urlsafe(32)
        try:
            self._set(self._key(token), str(user_id))
        except RedisError as e:
            raise TransientStoreError("Nie mozna utworzyc sesji") from e
        logger.info(f"Utworzono sesje dla uzytkownika {user_id}")
        return token

    def resolve(self, token: str) -> int | None:
        try:
            value = self._get(self._key(token))
        except RedisError as e:
            raise TransientStoreError("Nie mozna odczytac sesji") from e
        return int(value) if value is not None else None

    def revoke(self, token: str) -> bool:
        try:
            return bool(self._delete(self._key(token)))
        except RedisError as e:
            raise TransientStoreError("Nie mozna zakonczyc sesji") from e
