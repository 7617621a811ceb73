"""Tests for the credential fallback chain."""

import pytest

from storyclients.credentials import resolve_credential


def test_first_non_empty_value_wins():
    credential = resolve_credential(["A", "B", "C"], {"A": "", "B": "value-b", "C": "value-c"})

    assert credential.value == "value-b"
    assert credential.source == "B"


def test_unset_variables_are_skipped():
    credential = resolve_credential(["A", "B"], {"B": "value-b"})

    assert credential.source == "B"


def test_whitespace_is_stripped_and_blank_skipped():
    credential = resolve_credential(["A", "B"], {"A": " \t\n", "B": "  value-b  "})

    assert credential.value == "value-b"
    assert credential.source == "B"


def test_returns_none_when_nothing_set():
    assert resolve_credential(["A", "B"], {"A": "", "C": "ignored"}) is None


def test_empty_chain_is_rejected():
    with pytest.raises(ValueError):
        resolve_credential([], {"A": "value"})


def test_defaults_to_process_environment(monkeypatch):
    monkeypatch.setenv("STORYCLIENTS_TEST_KEY", "from-env")

    credential = resolve_credential(["STORYCLIENTS_TEST_MISSING", "STORYCLIENTS_TEST_KEY"])

    assert credential.value == "from-env"


def test_repr_hides_secret():
    credential = resolve_credential(["A"], {"A": "sk_live_secret"})

    assert "sk_live_secret" not in repr(credential)
    assert "A" in repr(credential)
