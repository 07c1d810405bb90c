import redis

from app.utils.retry import redis_retry
from app.utils.settings import REDIS_URL
from app.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje atomowo przez lua, skrypt dziala jako jedna nieprzerywalna operacja
#nie mozna wcisnac sie miedzy GET a DEL


class LockService:
    """
    -blokada billboardu na czas checkoutu (jeden checkout na billboard naraz)
    -zwalnianie locka tylko przez wlasciciela
    -atomowosc przy pomocy lua
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _key(billboard_id: int) -> str:
        return f"billboard:{billboard_id}:checkout_lock"

    @redis_retry()
    def acquire_billboard_lock(self, billboard_id: int, cart_session_id: int, ttl: int) -> bool:
        key = self._key(billboard_id)
        logger.info(f"Acquire lock {key} for cart session {cart_session_id}")
        #SET billboard:1:checkout_lock "123" NX EX 30
        return bool(
            self.redis.set(
                name=key,
                value=str(cart_session_id),
                nx=True,
                ex=ttl, #lock wygasa sam jesli proces padnie w trakcie checkoutu
            )
        )

    @redis_retry()
    def release_billboard_lock(self, billboard_id: int, cart_session_id: int) -> bool:
        key = self._key(billboard_id)
        logger.info(f"Release lock {key} for cart session {cart_session_id}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, str(cart_session_id))
        return bool(res)
