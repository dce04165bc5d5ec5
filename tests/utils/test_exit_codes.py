"""Unit tests for pomo_cli.utils.exit_codes."""

from __future__ import annotations

from pomo_cli.utils.exit_codes import ERROR_INVALID_FLAGS, SUCCESS


class TestConstants:
    def test_success_is_zero(self):
        assert SUCCESS == 0

    def test_invalid_flags_is_one(self):
        assert ERROR_INVALID_FLAGS == 1

    def test_codes_are_distinct_from_click_usage_error(self):
        assert 2 not in (SUCCESS, ERROR_INVALID_FLAGS)
