"""
アカウントDAL: 正規化済みemail 1件に紐づくファサード

全てのキーはコンストラクタで正規化したemail (trim + lower) から導出する。
"""
from typing import Any, Optional, Union

from pydantic.alias_generators import to_camel

from account_dal.core import security
from account_dal.core.document_store import ROOT_PATH, DocumentStore
from account_dal.core import keys
from account_dal.core.logging import get_logger
from account_dal.core.redis import get_store
from account_dal.models.account import DEFAULT_NAME, DEFAULT_PLAN, AccountRecord
from account_dal.models.invitation_code import InvitationCode
from account_dal.models.subscription import Subscription
from account_dal.schemas.register import CodeChannel, RegisterCodeResult
from account_dal.services import invitation_service, register_code_service, subscription_service

logger = get_logger(__name__)

FALLBACK_PLAN = "Free"


def _to_document_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """snake_caseのキーはcamelCaseに揃える"""
    return {(to_camel(k) if "_" in k else k): v for k, v in fields.items()}


class AccountDAL:
    def __init__(self, email: str, store: Optional[DocumentStore] = None):
        self.email = keys.normalize_email(email)
        self.store = store or get_store()

    def __repr__(self) -> str:
        return f"AccountDAL(email={self.email!r})"

    @property
    def user_key(self) -> str:
        return keys.user_key(self.email)

    async def _get(self, path: str = ROOT_PATH) -> Optional[Any]:
        return await self.store.json_get(self.user_key, path)

    async def _update(self, path: str, value: Any) -> bool:
        return await self.store.json_set(self.user_key, path, value)

    async def exists(self) -> bool:
        return await self.store.exists(self.user_key) > 0

    async def delete(self) -> bool:
        """アカウントドキュメントのみ削除 (招待コード・登録コードは残る)"""
        return await self.store.delete(self.user_key) > 0

    async def get(self) -> Optional[AccountRecord]:
        data = await self._get()
        if not data:
            return None
        return AccountRecord.model_validate(data)

    # =========================================================
    # 登録・ログイン
    # =========================================================

    @classmethod
    async def from_registration(
        cls,
        email: str,
        password: str,
        extra_fields: Optional[dict[str, Any]] = None,
        store: Optional[DocumentStore] = None,
    ) -> Optional["AccountDAL"]:
        """
        アカウントを新規作成。既に存在すればNone

        書き込みは JSON.SET NX なので、存在チェック後に別リクエストが先に作成しても
        先に作られたドキュメントは上書きされない。
        """
        account = cls(email, store=store)
        if await account.exists():
            logger.info("登録済みのためスキップ", extra={"extra_data": {"email": account.email}})
            return None

        now = security.now_ms()
        document = {
            "name": DEFAULT_NAME,
            "passwordHash": security.hash_password(password),
            "createdAt": now,
            "lastLoginAt": now,
            "isBlocked": False,
            "resetChances": 0,
            "invitationCodes": [],
            "subscriptions": [],
            "planNow": DEFAULT_PLAN,
            **_to_document_fields(extra_fields or {}),
        }
        record = AccountRecord.model_validate(document)

        created = await account.store.json_set(
            account.user_key, ROOT_PATH, record.to_document(), nx=True
        )
        if not created:
            logger.warning("同時登録により作成されませんでした", extra={"extra_data": {"email": account.email}})
            return None

        logger.info("アカウント作成", extra={"extra_data": {"email": account.email}})
        return account

    async def login(self, password: str) -> bool:
        """パスワード照合。成功時のみlastLoginAtを更新"""
        password_hash = await self._get("$.passwordHash")
        if not security.verify_password(password, password_hash):
            logger.info("ログイン失敗", extra={"extra_data": {"email": self.email}})
            return False

        await self._update("$.lastLoginAt", security.now_ms())
        logger.info("ログイン成功", extra={"extra_data": {"email": self.email}})
        return True

    async def get_plan(self) -> str:
        """role > planNow > "Free" の順で返す (購読履歴は見ない)"""
        return (
            await self._get("$.role")
            or await self._get("$.planNow")
            or FALLBACK_PLAN
        )

    # =========================================================
    # 登録コード
    # =========================================================

    async def new_register_code(
        self, channel: Union[CodeChannel, str], phone: Optional[str] = None
    ) -> RegisterCodeResult:
        return await register_code_service.new_register_code(
            self.store, self.email, channel, phone
        )

    async def activate_register_code(
        self,
        code: Union[str, int],
        channel: Union[CodeChannel, str],
        phone: Optional[str] = None,
    ) -> bool:
        return await register_code_service.activate_register_code(
            self.store, self.email, code, channel, phone
        )

    # =========================================================
    # 招待コード
    # =========================================================

    async def new_invitation_code(self, type: str) -> str:
        return await invitation_service.new_invitation_code(self.store, self.email, type)

    async def accept_invitation_code(self, code: str) -> Optional[InvitationCode]:
        return await invitation_service.accept_invitation_code(self.store, self.email, code)

    async def get_inviter_code(self) -> Optional[str]:
        return await self._get("$.inviterCode")

    async def get_invitation_codes(self) -> list[str]:
        return await self._get("$.invitationCodes") or []

    # =========================================================
    # リセット回数
    # =========================================================

    async def get_reset_chances(self) -> int:
        """リセット可能回数。未設定なら-1"""
        value = await self._get("$.resetChances")
        return -1 if value is None else value

    async def change_reset_chances_by(self, value: int) -> bool:
        results = await self.store.json_numincrby(self.user_key, "$.resetChances", value)
        return all(r is not None for r in results)

    # =========================================================
    # 購読
    # =========================================================

    async def new_subscription(self, subscription: Subscription) -> bool:
        return await subscription_service.new_subscription(self.store, self.email, subscription)

    async def get_subscriptions(self) -> list[Subscription]:
        return await subscription_service.get_subscriptions(self.store, self.email)

    async def get_current_subscription(self) -> Optional[Subscription]:
        return await subscription_service.get_current_subscription(self.store, self.email)
