"""Tests for foreground color selection."""

import pytest

from brandmotion.video.contrast import BLACK, WHITE, resolve_foreground


class TestResolveForeground:
    @pytest.mark.parametrize(
        "background,expected",
        [
            ("#ffffff", BLACK),
            ("#000000", WHITE),
            ("#0ea5e9", WHITE),  # Y = 127.6, just under the threshold
            ("#0f172a", WHITE),
            ("#f59e0b", BLACK),
        ],
    )
    def test_brightness_threshold(self, background: str, expected: str):
        assert resolve_foreground(background) == expected

    def test_shorthand_matches_full_form(self):
        assert resolve_foreground("#fff") == resolve_foreground("#ffffff")
        assert resolve_foreground("#000") == resolve_foreground("#000000")

    def test_hash_optional_and_case_insensitive(self):
        assert resolve_foreground("FFFFFF") == BLACK

    def test_exactly_128_is_light(self):
        # (299 + 587 + 114) * 128 / 1000 == 128
        assert resolve_foreground("#808080") == BLACK

    @pytest.mark.parametrize(
        "value",
        ["", None, "red", "#12345", "#ggg", "linear-gradient(135deg, #fff 0%, #eee 100%)"],
    )
    def test_malformed_input_is_white(self, value):
        assert resolve_foreground(value) == WHITE
