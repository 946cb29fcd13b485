from typing import Optional
from pydantic import Field

from account_dal.models.base import DocumentModel
from account_dal.models.subscription import Subscription

DEFAULT_NAME = "Anonymous"
DEFAULT_PLAN = "Free"


class AccountRecord(DocumentModel):
    """アカウントドキュメント (key: user:<email>)"""

    name: str = DEFAULT_NAME
    password_hash: str
    created_at: int
    last_login_at: int
    is_blocked: bool = False
    reset_chances: int = 0
    invitation_codes: list[str] = Field(default_factory=list)
    subscriptions: list[Subscription] = Field(default_factory=list)
    plan_now: Optional[str] = DEFAULT_PLAN
    role: Optional[str] = None
    phone: Optional[str] = None
    inviter_code: Optional[str] = None
