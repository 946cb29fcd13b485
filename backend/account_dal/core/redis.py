"""共有Redis接続 (起動時にinit_store、終了時にclose_store)"""
from typing import Optional

import redis.asyncio as aioredis

from account_dal.core.config import settings
from account_dal.core.document_store import DocumentStore
from account_dal.core.logging import get_logger, setup_logging

logger = get_logger(__name__)

_store: Optional[DocumentStore] = None


def create_redis(url: Optional[str] = None) -> aioredis.Redis:
    """非同期Redisクライアント生成"""
    redis_pool = aioredis.ConnectionPool.from_url(
        url or settings.REDIS_URL,
        max_connections=settings.REDIS_MAX_CONNECTIONS,
        decode_responses=True,
    )
    # from_poolでクライアントがプールを所有し、aclose時にプールも閉じる
    return aioredis.Redis.from_pool(redis_pool)


def init_store(url: Optional[str] = None, configure_logging: bool = True) -> DocumentStore:
    """プロセス共有のDocumentStoreを初期化 (起動時に1回)"""
    global _store
    if configure_logging:
        setup_logging(debug=settings.DEBUG)
    if _store is None:
        _store = DocumentStore(create_redis(url))
        logger.info(
            "DocumentStore初期化",
            extra={"extra_data": {"max_connections": settings.REDIS_MAX_CONNECTIONS}},
        )
    return _store


def set_store(store: Optional[DocumentStore]) -> None:
    """共有DocumentStoreを差し替え (テスト・独自クライアント用)"""
    global _store
    _store = store


def get_store() -> DocumentStore:
    """共有DocumentStoreを取得。未初期化ならエラー"""
    if _store is None:
        raise RuntimeError("DocumentStore is not initialized; call init_store() first")
    return _store


async def close_store() -> None:
    """共有DocumentStoreを閉じる"""
    global _store
    if _store is not None:
        await _store.close()
        _store = None
        logger.info("DocumentStore終了")


async def check_redis_connection() -> bool:
    """Redis接続チェック"""
    try:
        return await get_store().ping()
    except Exception:
        return False
