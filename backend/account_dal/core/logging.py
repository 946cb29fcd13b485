"""
account_dal のロギング

ライブラリなのでルートロガーには触れず、"account_dal" 配下のロガーだけを設定する。
構造化フィールドは logger.info("...", extra={"extra_data": {...}}) で渡す。
"""
import logging
import sys
import json
from datetime import datetime, timezone
from typing import IO, Optional

PACKAGE_LOGGER = "account_dal"

# 値をログに出さないフィールド
REDACTED_FIELDS = frozenset({"code", "password", "passwordHash"})


class JSONFormatter(logging.Formatter):
    """構造化JSONログフォーマッター"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        data = getattr(record, "extra_data", None)
        if data:
            log_entry["data"] = {
                k: ("***" if k in REDACTED_FIELDS else v) for k, v in data.items()
            }
        if record.exc_info and record.exc_info[0]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(debug: bool = False, stream: Optional[IO[str]] = None) -> logging.Logger:
    """account_dal ロガーにJSONハンドラを設定 (再実行しても重複しない)"""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter())

    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """account_dal 配下の名前付きロガーを取得"""
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
