"""Tests for structured StoryClients errors."""

from storyclients.shared.errors import (
    ClientConstructionError,
    ClientUnavailableError,
    StoryClientsError,
    UnknownClientError,
)


def test_errors_share_base_class():
    assert issubclass(ClientUnavailableError, StoryClientsError)
    assert issubclass(ClientConstructionError, StoryClientsError)
    assert issubclass(UnknownClientError, StoryClientsError)


def test_unavailable_error_hint_lists_variables():
    error = ClientUnavailableError("gemini", ("GOOGLE_API_KEY_P", "GOOGLE_API_KEY"))

    assert error.recovery_hint == "Set one of: GOOGLE_API_KEY_P, GOOGLE_API_KEY and restart the process"
    assert str(error) == "Client 'gemini' is not available: credential missing"


def test_to_dict():
    error = ClientConstructionError("openai", "bad key", {"source": "OPENAI_API_KEY"})

    payload = error.to_dict()["error"]
    assert payload["code"] == "CONSTRUCTION_FAILED"
    assert payload["details"] == {"client": "openai", "source": "OPENAI_API_KEY"}
    assert payload["recoverable"] is True


def test_describe_includes_recovery_hint():
    error = UnknownClientError("stripe", ["gemini", "openai"])

    assert error.describe() == (
        "Unknown client 'stripe'. Supported clients: gemini, openai "
        "(Run 'storyclients status' to list supported clients)"
    )


def test_repr_shows_code():
    error = ClientUnavailableError("openai", ["OPENAI_API_KEY"])

    assert repr(error) == (
        "ClientUnavailableError(code='CLIENT_UNAVAILABLE', "
        "message=\"Client 'openai' is not available: credential missing\")"
    )
