"""登録コード (メール/SMS認証用の6桁コード) の発行・検証"""
import asyncio
from typing import Optional, Union

from account_dal.core import security
from account_dal.core.config import settings
from account_dal.core.document_store import DocumentStore
from account_dal.core.exceptions import InvalidArgumentError, PhoneRequiredError
from account_dal.core.keys import register_code_key, user_key
from account_dal.core.logging import get_logger
from account_dal.schemas.register import CodeChannel, RegisterCodeResult, RegisterStatus

logger = get_logger(__name__)


def _resolve_key(email: str, channel: Union[CodeChannel, str], phone: Optional[str]) -> str:
    """チャネル検証してコードのキーを返す"""
    try:
        channel = CodeChannel(channel)
    except ValueError:
        raise InvalidArgumentError(f"Unknown code channel: {channel}") from None
    if channel == CodeChannel.PHONE and not phone:
        raise PhoneRequiredError()
    # TODO: 同じ電話番号を持つ既存ユーザーの重複チェック (電話番号の逆引きインデックスが必要)
    return register_code_key(channel.value, phone or email)


async def new_register_code(
    store: DocumentStore,
    email: str,
    channel: Union[CodeChannel, str],
    phone: Optional[str] = None,
) -> RegisterCodeResult:
    """
    登録コードを発行する

    既存コードの残りTTLが REGISTER_CODE_RESEND_AFTER 秒以上なら TOO_FAST を返し、
    それ未満 (期限切れ間近) または存在しない場合は新しいコードで上書きする。
    """
    key = _resolve_key(email, channel, phone)

    existing = await store.get(key)
    if existing:
        ttl = await store.ttl(key)
        if ttl >= settings.REGISTER_CODE_RESEND_AFTER:
            logger.info("登録コード再発行拒否", extra={"extra_data": {"key": key, "ttl": ttl}})
            return RegisterCodeResult(status=RegisterStatus.TOO_FAST, ttl=ttl)

    code = security.generate_six_digit_code()
    # SET EX: TTL無しのコードが残らないよう値と期限を同時に書き込む
    if await store.set(key, code, ex=settings.REGISTER_CODE_TTL):
        logger.info(
            "登録コード発行",
            extra={"extra_data": {"key": key, "ttl": settings.REGISTER_CODE_TTL}},
        )
        return RegisterCodeResult(
            status=RegisterStatus.SUCCESS,
            code=code,
            ttl=settings.REGISTER_CODE_TTL,
        )

    logger.error("登録コード保存失敗", extra={"extra_data": {"key": key}})
    return RegisterCodeResult(status=RegisterStatus.UNKNOWN_ERROR)


async def activate_register_code(
    store: DocumentStore,
    email: str,
    code: Union[str, int],
    channel: Union[CodeChannel, str],
    phone: Optional[str] = None,
) -> bool:
    """
    登録コードを検証する。一致すればコードを削除し、電話番号があればアカウントに保存

    戻り値はコード一致のみを表す (電話番号の保存結果は含まない)。
    """
    key = _resolve_key(email, channel, phone)
    stored = await store.get(key)
    if stored is None or str(stored).strip() != str(code).strip():
        logger.info("登録コード不一致", extra={"extra_data": {"key": key}})
        return False

    writes = [store.delete(key)]
    if phone:
        writes.append(store.json_set(user_key(email), "$.phone", phone))
    await asyncio.gather(*writes)

    logger.info("登録コード認証成功", extra={"extra_data": {"key": key, "with_phone": bool(phone)}})
    return True
