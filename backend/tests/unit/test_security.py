"""Unit tests for hashing and code generation helpers."""

import pytest

from account_dal.core import security


def test_md5_password_hash_trims_input():
    assert security.hash_password("  pw  ", scheme="md5") == security.md5_hex("pw")
    assert security.verify_password(" pw", security.md5_hex("pw")) is True
    assert security.verify_password("other", security.md5_hex("pw")) is False


def test_bcrypt_password_hash_round_trip():
    hashed = security.hash_password("pw", scheme="bcrypt")

    assert hashed.startswith("$2")
    assert security.verify_password("pw ", hashed) is True
    assert security.verify_password("nope", hashed) is False


def test_verify_without_stored_hash():
    assert security.verify_password("pw", None) is False


def test_unknown_scheme_rejected():
    with pytest.raises(ValueError):
        security.hash_password("pw", scheme="plain")


def test_six_digit_codes():
    codes = {security.generate_six_digit_code() for _ in range(200)}

    assert all(100000 <= c <= 999999 for c in codes)
    assert len(codes) > 1
