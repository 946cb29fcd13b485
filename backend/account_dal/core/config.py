from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """アプリケーション設定"""

    # Redis (RedisJSONモジュール必須)
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_MAX_CONNECTIONS: int = 20

    # 登録コード
    REGISTER_CODE_TTL: int = 300  # 5分
    REGISTER_CODE_RESEND_AFTER: int = 240  # 残りTTLがこれ未満になるまで再発行しない

    # パスワードハッシュ方式: md5 (既存データ互換) | bcrypt
    PASSWORD_HASH_SCHEME: str = "md5"

    # 環境
    ENV: str = "development"
    DEBUG: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
