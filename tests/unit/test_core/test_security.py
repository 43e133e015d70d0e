"""Tests for booth PIN checks and admin tokens."""
import pytest

from boothops.core.security import generate_admin_token, is_superadmin_class, verify_booth_pin


@pytest.mark.unit
class TestSecurity:

    def test_token_is_hex(self):
        token = generate_admin_token()

        assert len(token) == 48
        int(token, 16)

    def test_pin_exact_match(self):
        assert verify_booth_pin("0000", "0000")
        assert not verify_booth_pin("000", "0000")
        assert not verify_booth_pin("0000", "0000 ")

    def test_pin_with_none(self):
        assert not verify_booth_pin(None, "0000")
        assert not verify_booth_pin("0000", None)

    def test_korean_pin(self):
        assert verify_booth_pin("영산중", "영산중")

    def test_superadmin_class(self):
        assert is_superadmin_class("통합관리자", "통합관리자")
        assert not is_superadmin_class("1-1", "통합관리자")
