from pydantic import Field

from account_dal.models.base import DocumentModel


class InvitationCode(DocumentModel):
    """招待コード (key: invitationCode:<code>)"""

    inviter_email: str
    invitee_emails: list[str] = Field(default_factory=list)
    type: str
