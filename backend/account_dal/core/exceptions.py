"""account_dal の例外定義"""


class AccountDALError(Exception):
    """パッケージ共通の基底例外"""


class InvalidArgumentError(AccountDALError, ValueError):
    """引数が不正"""


class PhoneRequiredError(InvalidArgumentError):
    """phoneチャネルで電話番号が指定されていない"""

    def __init__(self, message: str = "Phone number is required"):
        super().__init__(message)
