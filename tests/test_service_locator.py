import pytest

from uikernel.services.service_locator import (
    ServiceAlreadyRegisteredError,
    ServiceLocator,
    ServiceNotFoundError,
    services,
)
from uikernel.utils.unique_id import UniqueId


def test_register_and_get():
    pool = UniqueId()
    services.register("id_pool", pool)
    assert services.get("id_pool") is pool


def test_double_register_raises():
    services.register("x", 1)
    with pytest.raises(ServiceAlreadyRegisteredError):
        services.register("x", 2)
    services.register("x", 3, allow_override=True)
    assert services.get("x") == 3


def test_get_typed_mismatch():
    services.register("id_pool", object())
    with pytest.raises(TypeError):
        services.get_typed("id_pool", UniqueId)


def test_try_get_default_and_unregister():
    assert services.try_get("missing", 123) == 123
    services.register("temp", object())
    services.unregister("temp")
    with pytest.raises(ServiceNotFoundError):
        services.get("temp")


def test_override_context_restores():
    services.register("timer_service", "real")
    with services.override_context(timer_service="fake", extra=1):
        assert services.get("timer_service") == "fake"
        assert services.get("extra") == 1
    assert services.get("timer_service") == "real"
    assert services.try_get("extra") is None


def test_local_instance_isolated():
    local = ServiceLocator()
    local.register("foo", 1)
    assert local.get("foo") == 1
    with pytest.raises(ServiceNotFoundError):
        services.get("foo")
