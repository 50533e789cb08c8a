import pytest

from uikernel.design.theme_presets import THEME
from uikernel.design.theme_switch import ThemeSwitch
from uikernel.services.event_bus import EventBus
from uikernel.services.kernel import create_kernel
from uikernel.services.service_locator import (
    EVENT_BUS,
    ID_POOL,
    THEME as THEME_KEY,
    TIMER_SERVICE,
    ServiceAlreadyRegisteredError,
    ServiceLocator,
    services,
)
from uikernel.utils.unique_id import UniqueId


class _Target:
    def __init__(self):
        self.variables = {}
        self.color_scheme = None

    def set_variable(self, name, value):
        self.variables[name] = value

    def set_color_scheme(self, value):
        self.color_scheme = value


class _LightEnv:
    def prefers_light(self):
        return True


def test_create_kernel_registers_shared_instances(timers):
    ctx = create_kernel(timers=timers)
    assert ctx.services is services
    assert services.get(EVENT_BUS) is ctx.event_bus
    assert services.get_typed(ID_POOL, UniqueId) is ctx.id_pool
    assert services.get(TIMER_SERVICE) is timers
    assert services.get_typed(THEME_KEY, ThemeSwitch).current == THEME.DARK
    assert isinstance(ctx.event_bus, EventBus)


def test_create_kernel_twice_requires_override(timers):
    local = ServiceLocator()
    create_kernel(local, timers=timers)
    with pytest.raises(ServiceAlreadyRegisteredError):
        create_kernel(local, timers=timers)
    ctx = create_kernel(local, timers=timers, allow_override=True)
    assert local.get(ID_POOL) is ctx.id_pool


def test_create_kernel_applies_environment_theme(timers):
    target = _Target()
    ctx = create_kernel(ServiceLocator(), timers=timers, target=target, environment=_LightEnv())
    assert ctx.theme.current == THEME.LIGHT
    assert target.color_scheme == "light dark"
    assert target.variables["--color-system"] == "#f3f3f3"


def test_create_kernel_custom_preset(timers):
    ctx = create_kernel(ServiceLocator(), timers=timers, preset={"dark": {"color_canvas": "#000"}})
    assert ctx.theme.variables() == {"--color-canvas": "#000"}
    ctx.theme.to_light()
    assert ctx.theme.current == THEME.DARK


def test_create_kernel_registers_nothing_when_a_key_is_taken(timers):
    local = ServiceLocator()
    local.register(THEME_KEY, "existing")
    target = _Target()
    with pytest.raises(ServiceAlreadyRegisteredError):
        create_kernel(local, timers=timers, target=target)
    assert local.try_get(EVENT_BUS) is None
    assert local.try_get(ID_POOL) is None
    assert local.try_get(TIMER_SERVICE) is None
    assert local.get(THEME_KEY) == "existing"
    assert target.variables == {}
    local.unregister(THEME_KEY)
    ctx = create_kernel(local, timers=timers)
    assert local.get(EVENT_BUS) is ctx.event_bus
