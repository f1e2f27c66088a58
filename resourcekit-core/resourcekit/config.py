import dataclasses
import logging
import os
from typing import Mapping, Union

from pydantic import Field
from pydantic.dataclasses import dataclass

from resourcekit import constants
from resourcekit.constants import (
    AWS_REGION_US_EAST_1,
    LOG_LEVELS,
    TRACE_LOG_LEVELS,
    TRUE_STRINGS,
)


def eval_log_type(env_var_name: str) -> Union[str, bool]:
    """Get the log type from environment variable"""
    rk_log = os.environ.get(env_var_name, "").lower().strip()
    return rk_log if rk_log in LOG_LEVELS else False


def is_env_true(env_var_name: str) -> bool:
    """Whether the given environment variable has a truthy value."""
    return os.environ.get(env_var_name, "").lower().strip() in TRUE_STRINGS


def parse_float_env(env_var_name: str, default: float, env: Mapping[str, str] = os.environ) -> float:
    """Read a float from the environment, falling back to ``default`` for empty or unset values."""
    value = env.get(env_var_name, "").strip()
    if not value:
        return default
    return float(value)


@dataclass
class WaiterTimeouts:
    """
    Named timeouts (in seconds) for the waiters. An instance is handed to every waiter invocation, so callers
    (and tests) can use short timeouts without touching process-wide state.

    Each value can be overridden through the environment with ``<NAME>_TIMEOUT``, e.g.
    ``TRIGGER_CREATE_TIMEOUT=60``.
    """

    propagation: float = Field(constants.DEFAULT_PROPAGATION_TIMEOUT, gt=0)
    ml_transform_delete: float = Field(constants.DEFAULT_ML_TRANSFORM_DELETE_TIMEOUT, gt=0)
    registry_delete: float = Field(constants.DEFAULT_REGISTRY_DELETE_TIMEOUT, gt=0)
    schema_available: float = Field(constants.DEFAULT_SCHEMA_AVAILABLE_TIMEOUT, gt=0)
    schema_delete: float = Field(constants.DEFAULT_SCHEMA_DELETE_TIMEOUT, gt=0)
    schema_version_available: float = Field(
        constants.DEFAULT_SCHEMA_VERSION_AVAILABLE_TIMEOUT, gt=0
    )
    trigger_create: float = Field(constants.DEFAULT_TRIGGER_CREATE_TIMEOUT, gt=0)
    trigger_delete: float = Field(constants.DEFAULT_TRIGGER_DELETE_TIMEOUT, gt=0)
    dev_endpoint_create: float = Field(constants.DEFAULT_DEV_ENDPOINT_CREATE_TIMEOUT, gt=0)
    dev_endpoint_delete: float = Field(constants.DEFAULT_DEV_ENDPOINT_DELETE_TIMEOUT, gt=0)

    @classmethod
    def from_environment(cls, env: Mapping[str, str] = os.environ) -> "WaiterTimeouts":
        overrides = {}
        for timeout_field in dataclasses.fields(cls):
            env_var_name = f"{timeout_field.name.upper()}_TIMEOUT"
            if env.get(env_var_name, "").strip():
                overrides[timeout_field.name] = parse_float_env(env_var_name, 0, env)
        return cls(**overrides)


# whether to enable verbose debug logging
RK_LOG = eval_log_type("RK_LOG")
DEBUG = is_env_true("DEBUG") or RK_LOG in TRACE_LOG_LEVELS

# custom endpoint for all AWS clients (e.g., an emulator), empty for the AWS default
AWS_ENDPOINT_URL = os.environ.get("AWS_ENDPOINT_URL", "").strip() or None

# region used when neither the caller nor the boto session provide one
AWS_DEFAULT_REGION = os.environ.get("AWS_DEFAULT_REGION", "").strip() or AWS_REGION_US_EAST_1

# whether boto's own retry handling should be disabled (the waiters already retry)
DISABLE_BOTO_RETRIES = is_env_true("DISABLE_BOTO_RETRIES")

# first delay between two status polls, in seconds
WAITER_POLL_INTERVAL = parse_float_env("WAITER_POLL_INTERVAL", 0.5)

# upper bound for the (exponentially growing) delay between two status polls, in seconds
WAITER_MAX_POLL_INTERVAL = parse_float_env("WAITER_MAX_POLL_INTERVAL", 10.0)

# consecutive "not found" results tolerated while waiting for a resource to reach a target state
WAITER_NOT_FOUND_CHECKS = int(
    os.environ.get("WAITER_NOT_FOUND_CHECKS", "").strip() or constants.DEFAULT_NOT_FOUND_CHECKS
)

# time budget of a lifecycle action driven by the ResourceProviderExecutor, in seconds
DEPLOY_LOOP_TIMEOUT = parse_float_env("DEPLOY_LOOP_TIMEOUT", constants.DEFAULT_DEPLOY_LOOP_TIMEOUT)

# whether actions on resource types without a provider succeed without doing anything (instead of failing)
IGNORE_UNSUPPORTED_RESOURCE_TYPES = is_env_true("IGNORE_UNSUPPORTED_RESOURCE_TYPES")

# default timeouts for all waiters
WAITER_TIMEOUTS = WaiterTimeouts.from_environment()


def is_trace_logging_enabled():
    if RK_LOG:
        log_level = str(RK_LOG).upper()
        return log_level.lower() in TRACE_LOG_LEVELS
    return False


def default_backoff():
    """Creates the backoff used between two status polls, based on the WAITER_* settings."""
    from resourcekit.utils.backoff import ExponentialBackoff

    return ExponentialBackoff(
        initial_interval=WAITER_POLL_INTERVAL,
        max_interval=max(WAITER_MAX_POLL_INTERVAL, WAITER_POLL_INTERVAL),
        multiplier=2.0,
        randomization_factor=0.1,
    )


# set log levels immediately, but will be overwritten later by setup_logging
if DEBUG:
    logging.getLogger("").setLevel(logging.DEBUG)
    logging.getLogger("resourcekit").setLevel(logging.DEBUG)
