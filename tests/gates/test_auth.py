"""Tests for the admin token check."""

from public_diary.gates.auth import verify_admin_token


def test_matching_token():
    assert verify_admin_token("s3cret", "s3cret") is True


def test_wrong_token():
    assert verify_admin_token("guess", "s3cret") is False


def test_unset_admin_token_denies_everyone():
    assert verify_admin_token("", "") is False
    assert verify_admin_token("anything", "") is False
    assert verify_admin_token(None, None) is False


def test_missing_supplied_token():
    assert verify_admin_token(None, "s3cret") is False
    assert verify_admin_token("", "s3cret") is False


def test_non_ascii_token():
    assert verify_admin_token("鍵🔑", "鍵🔑") is True
    assert verify_admin_token("鍵", "鍵🔑") is False
