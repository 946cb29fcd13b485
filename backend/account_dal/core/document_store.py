"""
RedisJSON + 文字列キー操作のアダプター

JSONPath ($...) で取得した結果はマッチのリストで返るため、
json_get は先頭要素を取り出して返す。
"""
from typing import Any, Optional

import redis.asyncio as aioredis

ROOT_PATH = "$"


class DocumentStore:
    """redis.asyncio.Redis をラップしたドキュメントストア"""

    def __init__(self, client: aioredis.Redis):
        self.client = client

    # --- JSONドキュメント ---

    async def json_get(self, key: str, path: str = ROOT_PATH) -> Optional[Any]:
        """pathの値を取得。キー・パスが無ければNone"""
        result = await self.client.json().get(key, path)
        if isinstance(result, list):
            return result[0] if result else None
        return result

    async def json_set(self, key: str, path: str, value: Any, nx: bool = False) -> bool:
        """pathに値を設定。nx=Trueならキーが存在しない場合のみ書き込む"""
        result = await self.client.json().set(key, path, value, nx=nx)
        return bool(result)

    async def json_arrappend(self, key: str, path: str, value: Any) -> list[Optional[int]]:
        """配列に追記。マッチごとの新しい長さ (非配列はNone) を返す"""
        result = await self.client.json().arrappend(key, path, value)
        if result is None:
            return [None]
        return result if isinstance(result, list) else [result]

    async def json_numincrby(self, key: str, path: str, delta: int) -> list[Optional[Any]]:
        """数値を加算。マッチごとの新しい値 (非数値はNone) を返す"""
        result = await self.client.json().numincrby(key, path, delta)
        if result is None:
            return [None]
        return result if isinstance(result, list) else [result]

    # --- キー操作 ---

    async def exists(self, key: str) -> int:
        return await self.client.exists(key)

    async def delete(self, key: str) -> int:
        return await self.client.delete(key)

    # --- 文字列キー ---

    async def get(self, key: str) -> Optional[str]:
        return await self.client.get(key)

    async def set(self, key: str, value: Any, ex: Optional[int] = None) -> bool:
        """exを指定すると値とTTLを1コマンドで設定する"""
        return bool(await self.client.set(key, value, ex=ex))

    async def expire(self, key: str, seconds: int) -> bool:
        return bool(await self.client.expire(key, seconds))

    async def ttl(self, key: str) -> int:
        """残りTTL(秒)。キー無しは-2、期限無しは-1"""
        return await self.client.ttl(key)

    # --- 接続 ---

    async def ping(self) -> bool:
        return bool(await self.client.ping())

    async def close(self) -> None:
        await self.client.aclose(close_connection_pool=True)
