"""Tests for identifier helpers."""

import pytest

from src.storage.identifiers import claim_key, is_valid_document_id, parse_int_id


@pytest.mark.parametrize(
    "value,expected",
    [
        ("1", 1),
        ("42", 42),
        (7, 7),
        ("0", None),
        (0, None),
        (-3, None),
        ("-3", None),
        ("abc", None),
        ("", None),
        ("1e3", None),
        (True, None),
        (None, None),
    ],
)
def test_parse_int_id(value, expected):
    assert parse_int_id(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        ("aB3dE5fG7hI9jK1lM3nO", True),
        ("665f1c2e8b3a4d0012345678", True),
        ("1", True),
        ("", False),
        ("a/b", False),
        (".", False),
        ("..", False),
        ("__meta__", False),
        ("_partial_", True),
        ("é" * 750, True),
        ("é" * 751, False),
        (123, False),
    ],
)
def test_is_valid_document_id(value, expected):
    assert is_valid_document_id(value) is expected


def test_claim_key_is_stable_and_pair_specific():
    key = claim_key("event-1", "Wallet-C")
    assert key == claim_key("event-1", "Wallet-C")
    assert key != claim_key("event-1", "Wallet-D")
    assert key != claim_key("event-2", "Wallet-C")
    assert is_valid_document_id(key)
