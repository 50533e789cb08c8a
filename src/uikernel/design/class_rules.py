"""Class-name rule resolution for widget regions.

Every widget accepts a *default* style (shipped with the widget) and an
optional caller *override*. This module turns the pair into a callable that
returns the class tokens for a ``(region, state)`` pair.

Style input shapes
------------------
* plain string  -> seed class name; output is ``"<name> <region> [<state>]"``
* rule set      -> mapping ``region -> rule``; a rule is either a plain value
  (string / list of tokens, applied in every state) or a state-keyed mapping
  whose ``base`` entry applies regardless of state
* absent        -> ``None``, blank strings and empty mappings

Precedence
----------
1. non-blank string override wins outright
2. non-empty rule-set override is merged onto a rule-set default region by
   region (override keys win, default-only regions and override-only regions
   are both kept); a string default is replaced
3. any "no-op" override (``None``, ``""``, ``{}``) leaves the default as is
4. nothing usable left -> the seed name (or no classes when there is no seed)

Resolution never flattens or deduplicates stored values. When both a ``base``
and a state entry exist the output is ``Multiple((base, state_value))``;
``join_classes`` is the helper that renders any output into markup.

The module is pure data transformation (no Qt dependency).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Final, List, Mapping, Optional, Tuple, Union

from uikernel.config import settings

__all__ = [
    "BASE",
    "Region",
    "State",
    "REGIONS",
    "STATES",
    "StringStyle",
    "RuleSetStyle",
    "ABSENT",
    "StyleInput",
    "Single",
    "Multiple",
    "ResolvedOutput",
    "ClassFn",
    "parse_style",
    "effective_style",
    "resolve_class_fn",
    "is_neutral",
    "as_class_value",
    "join_classes",
]

_logger = logging.getLogger(__name__)

BASE: Final = "base"


class State:
    """Reserved state names. Any other string is a custom state."""

    NEUTRAL: Final = "neutral"
    ACTIVE: Final = "active"
    INACTIVE: Final = "inactive"


class Region:
    WHOLE: Final = "whole"
    MIDDLE: Final = "middle"
    MAIN: Final = "main"
    TOP: Final = "top"
    LEFT: Final = "left"
    RIGHT: Final = "right"
    BOTTOM: Final = "bottom"
    LABEL: Final = "label"
    AUX: Final = "aux"
    EXTRA: Final = "extra"


REGIONS: Final[Tuple[str, ...]] = (
    Region.WHOLE,
    Region.MIDDLE,
    Region.MAIN,
    Region.TOP,
    Region.LEFT,
    Region.RIGHT,
    Region.BOTTOM,
    Region.LABEL,
    Region.AUX,
    Region.EXTRA,
)
STATES: Final[Tuple[str, ...]] = (State.NEUTRAL, State.ACTIVE, State.INACTIVE)

ClassValue = Any  # str | list of class values | {token: flag}
NormalizedRules = Dict[str, Dict[str, ClassValue]]


# Style input variants ------------------------------------------------------
@dataclass(frozen=True)
class StringStyle:
    name: str


@dataclass(frozen=True)
class RuleSetStyle:
    rules: NormalizedRules


class _Absent:
    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return "ABSENT"


ABSENT: Final = _Absent()

StyleInput = Union[StringStyle, RuleSetStyle, _Absent]


# Resolved output variants --------------------------------------------------
@dataclass(frozen=True)
class Single:
    value: ClassValue


@dataclass(frozen=True)
class Multiple:
    values: Tuple[ClassValue, ...]


ResolvedOutput = Optional[Union[Single, Multiple]]


def is_neutral(state: str) -> bool:
    """Return True unless ``state`` is ``active`` or ``inactive``."""
    return state != State.ACTIVE and state != State.INACTIVE


def _normalize_rules(raw: Mapping[str, Any]) -> NormalizedRules:
    out: NormalizedRules = {}
    for region, value in raw.items():
        if isinstance(value, Mapping):
            out[region] = dict(value)
        else:
            out[region] = {BASE: value}
    return out


def parse_style(raw: Any) -> StyleInput:
    """Convert a raw style (``str`` / mapping / ``None`` / tagged) to its tagged form."""
    if raw is None or raw is ABSENT:
        return ABSENT
    if isinstance(raw, StringStyle):
        return raw if raw.name.strip() else ABSENT
    if isinstance(raw, RuleSetStyle):
        return raw if raw.rules else ABSENT
    if isinstance(raw, str):
        return StringStyle(raw) if raw.strip() else ABSENT
    if isinstance(raw, Mapping):
        rules = _normalize_rules(raw)
        return RuleSetStyle(rules) if rules else ABSENT
    _logger.debug("Ignoring unsupported style input of type %s", type(raw).__name__)
    return ABSENT


def _merge(default: RuleSetStyle, override: RuleSetStyle) -> RuleSetStyle:
    merged: NormalizedRules = {}
    for region in dict.fromkeys([*default.rules, *override.rules]):
        merged[region] = {**default.rules.get(region, {}), **override.rules.get(region, {})}
    return RuleSetStyle(merged)


def effective_style(default: Any, override: Any = None, *, seed: Optional[str] = None) -> StyleInput:
    """Compute the style input that wins after applying precedence rules."""
    base = parse_style(default)
    over = parse_style(override)
    effective: StyleInput
    if isinstance(over, StringStyle):
        effective = over
    elif isinstance(over, RuleSetStyle):
        effective = _merge(base, over) if isinstance(base, RuleSetStyle) else over
    else:
        effective = base
    if effective is ABSENT:
        return parse_style(seed)
    return effective


def _string_class(name: str, region: str, state: str, append_neutral: bool) -> str:
    if not state or (state == State.NEUTRAL and not append_neutral):
        return f"{name} {region}"
    return f"{name} {region} {state}"


def _rule_class(rules: NormalizedRules, region: str, state: str) -> ResolvedOutput:
    rule = rules.get(region)
    if rule is None:
        return None
    constant = rule.get(BASE)
    dynamic = rule.get(state)
    if dynamic is None:
        dynamic = rule.get(State.NEUTRAL)
    # None, "", [] and {} all count as missing
    if not constant and not dynamic:
        return None
    if constant and dynamic:
        return Multiple((constant, dynamic))
    return Single(constant if constant else dynamic)


@dataclass(frozen=True)
class ClassFn:
    """Callable returned by :func:`resolve_class_fn`.

    ``effective`` is the tagged style input the precedence rules selected.
    """

    effective: StyleInput
    append_neutral_state: bool = False

    def __call__(self, region: str, state: str = State.NEUTRAL) -> ResolvedOutput:
        style = self.effective
        if isinstance(style, StringStyle):
            return Single(_string_class(style.name, region, state, self.append_neutral_state))
        if isinstance(style, RuleSetStyle):
            return _rule_class(style.rules, region, state)
        return None


def resolve_class_fn(
    default: Any,
    override: Any = None,
    *,
    seed: Optional[str] = None,
    append_neutral_state: Optional[bool] = None,
) -> ClassFn:
    """Build the per-region class resolver for one widget instance.

    Parameters
    ----------
    default : str | Mapping | None
        Style shipped with the widget.
    override : str | Mapping | None
        Caller supplied style; blank strings and empty mappings mean "none".
    seed : str | None
        Identity class used when neither input yields anything usable.
    append_neutral_state : bool | None
        Keep the ``neutral`` token on plain-string output. ``None`` uses
        ``settings.APPEND_NEUTRAL_STATE``.
    """
    if append_neutral_state is None:
        append_neutral_state = settings.APPEND_NEUTRAL_STATE
    return ClassFn(effective_style(default, override, seed=seed), bool(append_neutral_state))


def as_class_value(output: ResolvedOutput) -> ClassValue:
    """Unwrap a resolved output into ``None``, the stored value, or a list."""
    if output is None:
        return None
    if isinstance(output, Single):
        return output.value
    return list(output.values)


def _collect(value: Any, out: List[str]) -> None:
    if value is None or isinstance(value, bool):
        return
    if isinstance(value, str):
        token = value.strip()
        if token:
            out.append(token)
    elif isinstance(value, (int, float)):
        if value:
            out.append(str(value))
    elif isinstance(value, Single):
        _collect(value.value, out)
    elif isinstance(value, Multiple):
        _collect(value.values, out)
    elif isinstance(value, Mapping):
        out.extend(str(k) for k, flag in value.items() if flag)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _collect(item, out)


def join_classes(value: Any) -> str:
    """Render a resolved output (or raw class value) as a ``class`` attribute string.

    Nested lists are flattened, ``{token: flag}`` mappings contribute the
    truthy keys, falsy entries are dropped.
    """
    tokens: List[str] = []
    _collect(value, tokens)
    return " ".join(tokens)
