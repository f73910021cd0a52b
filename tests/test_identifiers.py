"""
Tests for identifier format helpers.
"""

from uuid import UUID

import pytest

from identity_cache.utils import parse_identifier, undashed

NOTCH = UUID("069a79f4-44e9-4726-a5be-fca90e38aaf5")


@pytest.mark.parametrize(
    "text",
    [
        "069a79f4-44e9-4726-a5be-fca90e38aaf5",
        "069A79F4-44E9-4726-A5BE-FCA90E38AAF5",
        "069a79f444e94726a5befca90e38aaf5",
    ],
)
def test_parse_identifier_accepts_both_forms(text):
    assert parse_identifier(text) == NOTCH


@pytest.mark.parametrize(
    "text",
    [
        "Notch",
        "069a79f4-44e9-4726-a5be-fca90e38aaf",
        "069a79f444e94726a5befca90e38aaf5ff",
        "x069a79f4-44e9-4726-a5be-fca90e38aaf5",
        "",
    ],
)
def test_parse_identifier_rejects_other_text(text):
    assert parse_identifier(text) is None


def test_undashed():
    assert undashed(NOTCH) == "069a79f444e94726a5befca90e38aaf5"
