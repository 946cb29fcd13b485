"""購読履歴から現在の購読を決定する"""
from typing import Iterable, Optional

from account_dal.core import security
from account_dal.core.document_store import DocumentStore
from account_dal.core.keys import user_key
from account_dal.models.subscription import Subscription


def pick_current_subscription(
    subscriptions: Iterable[Subscription], at_ms: int
) -> Optional[Subscription]:
    """
    先頭から1回走査して候補を更新する
    - 最初のレコードは無条件で候補
    - 以降はlevelが候補以上、かつ期間内のときのみ候補を置き換える
    - levelが候補未満なら期間に関係なくスキップ
    期間内のレコードが無くても候補はそのまま返す (期限切れを返すことがある)
    """
    current: Optional[Subscription] = None
    for subscription in subscriptions:
        if current is None:
            current = subscription
            continue
        if subscription.level < current.level:
            continue
        if subscription.is_active_at(at_ms):
            current = subscription
    return current


async def get_subscriptions(store: DocumentStore, email: str) -> list[Subscription]:
    data = await store.json_get(user_key(email), "$.subscriptions")
    return [Subscription.model_validate(s) for s in data or []]


async def new_subscription(store: DocumentStore, email: str, subscription: Subscription) -> bool:
    """購読を追加。ユーザーが存在することは呼び出し側で保証すること"""
    results = await store.json_arrappend(
        user_key(email), "$.subscriptions", subscription.to_document()
    )
    return all(r is not None for r in results)


async def get_current_subscription(store: DocumentStore, email: str) -> Optional[Subscription]:
    """現在の購読。購読が無ければNone (Free)"""
    subscriptions = await get_subscriptions(store, email)
    return pick_current_subscription(subscriptions, security.now_ms())
