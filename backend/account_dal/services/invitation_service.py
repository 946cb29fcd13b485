"""招待コード台帳"""
import asyncio
from typing import Optional

from account_dal.core import security
from account_dal.core.document_store import ROOT_PATH, DocumentStore
from account_dal.core.keys import invitation_code_key, user_key
from account_dal.core.logging import get_logger
from account_dal.models.invitation_code import InvitationCode

logger = get_logger(__name__)


async def new_invitation_code(store: DocumentStore, email: str, type: str) -> str:
    """
    招待コードを生成し、コードのドキュメントを作成してユーザーのinvitationCodesに追加する
    ユーザーが存在することは呼び出し側で保証すること
    """
    code = security.generate_invitation_code(email)
    invitation = InvitationCode(inviter_email=email, invitee_emails=[], type=type)

    await asyncio.gather(
        store.json_set(invitation_code_key(code), ROOT_PATH, invitation.to_document()),
        store.json_arrappend(user_key(email), "$.invitationCodes", code),
    )
    logger.info("招待コード発行", extra={"extra_data": {"email": email, "type": type}})
    return code


async def get_invitation_code(store: DocumentStore, code: str) -> Optional[InvitationCode]:
    data = await store.json_get(invitation_code_key(code))
    if not data:
        return None
    return InvitationCode.model_validate(data)


async def accept_invitation_code(
    store: DocumentStore, email: str, code: str
) -> Optional[InvitationCode]:
    """
    招待コードを受け入れる
    1. コードの存在確認 (無ければNone)
    2. ユーザーのinviterCodeを設定 (既存値は上書き)
    3. コードのinviteeEmailsにユーザーのemailを追加
    戻り値は更新前に読んだ招待コード情報
    """
    invitation = await get_invitation_code(store, code)
    if invitation is None:
        logger.info("招待コードが見つかりません", extra={"extra_data": {"code": code}})
        return None

    await asyncio.gather(
        store.json_set(user_key(email), "$.inviterCode", code),
        store.json_arrappend(invitation_code_key(code), "$.inviteeEmails", email),
    )
    logger.info(
        "招待コード受け入れ",
        extra={"extra_data": {"email": email, "inviter": invitation.inviter_email, "type": invitation.type}},
    )
    return invitation
