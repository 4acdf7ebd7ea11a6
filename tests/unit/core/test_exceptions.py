"""Unit tests for the exception hierarchy."""

import pytest

from noteboard.core.exceptions import (
    ApplicationError,
    ConfigurationError,
    NetworkError,
    NotFoundError,
    RemoteStoreError,
)


@pytest.mark.parametrize(
    ("exc_cls", "code"),
    [
        (NetworkError, "SYS_NETWORK_ERROR"),
        (NotFoundError, "RES_NOT_FOUND"),
        (ConfigurationError, "SYS_CONFIGURATION_ERROR"),
    ],
)
def test_default_codes(exc_cls, code):
    exc = exc_cls()
    assert exc.code == code
    assert isinstance(exc, ApplicationError)
    assert str(exc) == exc.message


def test_remote_store_errors_share_a_base():
    assert issubclass(NetworkError, RemoteStoreError)
    assert issubclass(NotFoundError, RemoteStoreError)
    assert not issubclass(ConfigurationError, RemoteStoreError)


def test_custom_message():
    assert NotFoundError("note 3 not found").message == "note 3 not found"
