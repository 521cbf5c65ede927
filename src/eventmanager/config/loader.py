from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib.resources import files as resource_files
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import yaml

from ..exceptions import ConfigError

logger = logging.getLogger(__name__)

ERROR_POLICY_RAISE = "raise"
ERROR_POLICY_LOG = "log"
ERROR_POLICIES = (ERROR_POLICY_RAISE, ERROR_POLICY_LOG)

ENV_CONFIG_FILE = "EVENTMANAGER_CONFIG_FILE"


def _as_bool(value: Any) -> bool:
    """Parse a boolean from a YAML value or an ``EVENTMANAGER_*`` env string.

    Strings are matched case-insensitively against 1/0, true/false, yes/no,
    y/n and on/off; anything else raises :class:`ConfigError`.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in {"1", "true", "yes", "y", "on"}:
            return True
        if v in {"0", "false", "no", "n", "off"}:
            return False
    raise ConfigError(f"Not a boolean value: {value!r}")


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"Not an integer value: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Not an integer value: {value!r}") from exc


def _as_policy(value: Any) -> str:
    policy = str(value).strip().lower()
    if policy not in ERROR_POLICIES:
        raise ConfigError(f"Unknown error policy {value!r}; expected one of {ERROR_POLICIES}")
    return policy


_FIELDS: Dict[str, Tuple[str, Callable[[Any], Any]]] = {
    "EVENTMANAGER_THREAD_SAFE": ("thread_safe", _as_bool),
    "EVENTMANAGER_ERROR_POLICY": ("error_policy", _as_policy),
    "EVENTMANAGER_MODIFIER_PRIORITY": ("modifier_priority", _as_int),
}


@dataclass(frozen=True)
class DispatcherConfig:
    """Runtime options for an :class:`~eventmanager.events.manager.EventManager`.

    ``thread_safe`` guards the listener registry with a lock, ``error_policy``
    decides whether listener errors abort a dispatch (``"raise"``) or are
    logged and skipped (``"log"``), and ``modifier_priority`` is the priority
    used by modifiers registered without an explicit one.
    """

    thread_safe: bool = True
    error_policy: str = ERROR_POLICY_RAISE
    modifier_priority: int = 1000

    def __post_init__(self) -> None:
        if self.error_policy not in ERROR_POLICIES:
            raise ConfigError(f"Unknown error policy {self.error_policy!r}; expected one of {ERROR_POLICIES}")
        if isinstance(self.modifier_priority, bool) or not isinstance(self.modifier_priority, int):
            raise ConfigError(f"modifier_priority must be an int, got {self.modifier_priority!r}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DispatcherConfig":
        casters = {name: caster for name, caster in _FIELDS.values()}
        values: Dict[str, Any] = {}
        for key, raw in data.items():
            if key not in casters:
                logger.warning("Ignoring unknown dispatcher config key: %s", key)
                continue
            values[key] = casters[key](raw)
        return cls(**values)


def _read_yaml(path: Optional[Path]) -> Dict[str, Any]:
    if path is None:
        text = resource_files("eventmanager.config").joinpath("dispatcher.yaml").read_text(encoding="utf-8")
        logger.debug("Loaded embedded dispatcher config resource")
    else:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        logger.debug("Loaded dispatcher config from path: %s", path)

    raw = yaml.safe_load(text) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Dispatcher config must be a mapping, got {type(raw).__name__}")
    return raw


def _env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for env_key, (field_name, _caster) in _FIELDS.items():
        if env.get(env_key, "") != "":
            out[field_name] = env[env_key]
    return out


def load_dispatcher_config(
    path: Optional[Path | str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> DispatcherConfig:
    """Load dispatcher configuration from YAML and the environment.

    Order of precedence (lowest to highest): defaults < file < env.
    If ``path`` is None, ``EVENTMANAGER_CONFIG_FILE`` is consulted, then the
    embedded default resource at eventmanager/config/dispatcher.yaml.
    """
    env = os.environ if env is None else env
    if path is None and env.get(ENV_CONFIG_FILE):
        path = env[ENV_CONFIG_FILE]
    chosen = Path(path).expanduser().resolve() if path is not None else None

    data = _read_yaml(chosen)
    data.update(_env_overrides(env))
    config = DispatcherConfig.from_dict(data)
    logger.info(
        "Dispatcher config: thread_safe=%s | error_policy=%s | modifier_priority=%s",
        config.thread_safe,
        config.error_policy,
        config.modifier_priority,
    )
    return config
