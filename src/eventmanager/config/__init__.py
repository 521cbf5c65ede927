from .loader import (
    ERROR_POLICIES,
    ERROR_POLICY_LOG,
    ERROR_POLICY_RAISE,
    DispatcherConfig,
    load_dispatcher_config,
)

__all__ = [
    "DispatcherConfig",
    "load_dispatcher_config",
    "ERROR_POLICIES",
    "ERROR_POLICY_LOG",
    "ERROR_POLICY_RAISE",
]
