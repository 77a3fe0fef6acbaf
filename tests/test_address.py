import pytest

from cayopay.domain.address import Email


def test_debug_impl():
    email = Email("[email]")
    assert repr(email) == "Email(***)"


def test_str_is_masked():
    email = Email("user@example.com")
    assert str(email) == "Email(***)"
    assert "user@example.com" not in f"{email}"


def test_expose_returns_address():
    assert Email("user@example.com").expose() == "user@example.com"


def test_equality_and_hash():
    assert Email("user@example.com") == Email("user@example.com")
    assert Email("user@example.com") != Email("other@example.com")
    assert len({Email("user@example.com"), Email("user@example.com")}) == 1


def test_rejects_non_string():
    with pytest.raises(TypeError):
        Email(42)