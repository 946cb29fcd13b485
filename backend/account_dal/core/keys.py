"""Redisキー命名 (既存データ互換のため変更不可)"""

USER_PREFIX = "user:"
REGISTER_CODE_PREFIX = "register:code:"
INVITATION_CODE_PREFIX = "invitationCode:"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def user_key(email: str) -> str:
    return f"{USER_PREFIX}{email}"


def register_code_key(channel: str, identifier: str) -> str:
    return f"{REGISTER_CODE_PREFIX}{channel}:{identifier}"


def invitation_code_key(code: str) -> str:
    return f"{INVITATION_CODE_PREFIX}{code}"
