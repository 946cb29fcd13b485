from account_dal.models.base import DocumentModel


class Subscription(DocumentModel):
    """購読レコード (アカウントに埋め込み、追記のみ)"""

    level: int
    starts_at: int  # ms
    ends_at: int  # ms

    def is_active_at(self, at_ms: int) -> bool:
        """期間 [starts_at, ends_at] に含まれるか (両端含む)"""
        return self.starts_at <= at_ms <= self.ends_at
