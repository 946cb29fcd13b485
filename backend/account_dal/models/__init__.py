from account_dal.models.account import AccountRecord
from account_dal.models.invitation_code import InvitationCode
from account_dal.models.subscription import Subscription

__all__ = ["AccountRecord", "InvitationCode", "Subscription"]
