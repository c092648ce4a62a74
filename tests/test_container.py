from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from firestore_users.application.services.user_service import UserService
from firestore_users.core import config
from firestore_users.core.config import ConfigurationError, Settings
from firestore_users.di import container as container_module
from firestore_users.di.container import DIContainer, get_container, shutdown_container
from firestore_users.domain.repositories.user_repository import UserRepository
from firestore_users.infrastructure.db import firestore_connection
from firestore_users.infrastructure.db.mongo_user_repository import MongoUserRepository
from tests.conftest import VALID_ENV


@pytest.fixture()
def mongo_client_cls(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    client_cls = MagicMock(name="MongoClient")
    monkeypatch.setattr(firestore_connection, "MongoClient", client_cls)
    return client_cls


@pytest.fixture(autouse=True)
def clean_container(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(container_module, "_container", None)
    yield
    shutdown_container()


def test_container_wires_one_connection_into_repository(
    mongo_client_cls: MagicMock, valid_settings: Settings
) -> None:
    container = DIContainer(valid_settings)

    repository = container.get(UserRepository)
    assert isinstance(repository, MongoUserRepository)
    assert isinstance(container.get(UserService), UserService)
    mongo_client_cls.assert_called_once()
    database = mongo_client_cls.return_value.__getitem__.return_value
    database.__getitem__.assert_called_with("users")


def test_container_uses_configured_collection(mongo_client_cls: MagicMock) -> None:
    DIContainer(Settings(environ={**VALID_ENV, "USERS_COLLECTION": "people"}))

    database = mongo_client_cls.return_value.__getitem__.return_value
    database.__getitem__.assert_called_with("people")


def test_unknown_registration_raises(mongo_client_cls: MagicMock, valid_settings: Settings) -> None:
    with pytest.raises(ValueError, match="No registration"):
        DIContainer(valid_settings).get("postgres_client")


def test_get_container_is_lazy_and_shutdown_reconnects(
    monkeypatch: pytest.MonkeyPatch, mongo_client_cls: MagicMock, valid_settings: Settings
) -> None:
    monkeypatch.setattr(config, "_settings", valid_settings)

    first = get_container()
    assert get_container() is first
    assert mongo_client_cls.call_count == 1

    shutdown_container()
    mongo_client_cls.return_value.close.assert_called_once()
    with pytest.raises(ValueError):
        first.get(UserService)

    second = get_container()
    assert second is not first
    assert mongo_client_cls.call_count == 2


def test_get_container_fails_fatally_without_settings(mongo_client_cls: MagicMock) -> None:
    with pytest.raises(ConfigurationError):
        get_container()
    mongo_client_cls.assert_not_called()
