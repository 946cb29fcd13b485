from enum import Enum
from pydantic import BaseModel
from typing import Optional


class CodeChannel(str, Enum):
    EMAIL = "email"
    PHONE = "phone"


class RegisterStatus(str, Enum):
    SUCCESS = "success"
    TOO_FAST = "too_fast"
    ALREADY_REGISTER = "already_register"  # 互換用 (本モジュールでは返さない)
    UNKNOWN_ERROR = "unknown_error"


class RegisterCodeResult(BaseModel):
    """登録コード発行結果"""
    status: RegisterStatus
    code: Optional[int] = None
    ttl: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.status == RegisterStatus.SUCCESS
