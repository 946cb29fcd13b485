"""ハッシュ・コード生成"""
import hashlib
import secrets
import time
from typing import Optional

import bcrypt

from account_dal.core.config import settings

BCRYPT_PREFIX = "$2"


def now_ms() -> int:
    """現在時刻 (ミリ秒)"""
    return int(time.time() * 1000)


def md5_hex(value: str) -> str:
    return hashlib.md5(value.encode("utf-8")).hexdigest()


def hash_password(password: str, scheme: Optional[str] = None) -> str:
    """
    パスワードをハッシュ化 (前後の空白は除去)
    md5は既存データとの互換用、bcryptは新規推奨
    """
    scheme = scheme or settings.PASSWORD_HASH_SCHEME
    password = password.strip()
    if scheme == "bcrypt":
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")
    if scheme == "md5":
        return md5_hex(password)
    raise ValueError(f"Unknown password hash scheme: {scheme}")


def verify_password(password: str, hashed: Optional[str]) -> bool:
    """保存済みハッシュと照合。形式から方式を判定する"""
    if not hashed:
        return False
    password = password.strip()
    if hashed.startswith(BCRYPT_PREFIX):
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    return secrets.compare_digest(md5_hex(password), hashed)


def generate_six_digit_code() -> int:
    """6桁の数値コード (100000-999999)"""
    return 100000 + secrets.randbelow(900000)


def generate_invitation_code(email: str) -> str:
    """招待コード = md5(email + 現在時刻ms)"""
    return md5_hex(f"{email}{now_ms()}")
