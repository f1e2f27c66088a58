import os

# strings to indicate truthy values
TRUE_STRINGS = ("1", "true", "True")
# strings with valid log levels for RK_LOG
LOG_LEVELS = ("trace-internal", "trace", "debug", "info", "warn", "error", "warning")

# trace log levels (excluding/including internal API calls), configurable via $RK_LOG
RK_LOG_TRACE = "trace"
RK_LOG_TRACE_INTERNAL = "trace-internal"
TRACE_LOG_LEVELS = [RK_LOG_TRACE, RK_LOG_TRACE_INTERNAL]

# AWS region us-east-1
AWS_REGION_US_EAST_1 = "us-east-1"

# environment variable to override max pool connections
try:
    MAX_POOL_CONNECTIONS = int(os.environ["MAX_POOL_CONNECTIONS"])
except (KeyError, ValueError):
    MAX_POOL_CONNECTIONS = 50

# delimiter between the components of a composite resource id (e.g. "bucket,owner")
RESOURCE_ID_SEPARATOR = ","

# default waiter timeouts in seconds, overridable via config.WaiterTimeouts
DEFAULT_PROPAGATION_TIMEOUT = 2 * 60
DEFAULT_ML_TRANSFORM_DELETE_TIMEOUT = 2 * 60
DEFAULT_REGISTRY_DELETE_TIMEOUT = 2 * 60
DEFAULT_SCHEMA_AVAILABLE_TIMEOUT = 2 * 60
DEFAULT_SCHEMA_DELETE_TIMEOUT = 2 * 60
DEFAULT_SCHEMA_VERSION_AVAILABLE_TIMEOUT = 2 * 60
DEFAULT_TRIGGER_CREATE_TIMEOUT = 5 * 60
DEFAULT_TRIGGER_DELETE_TIMEOUT = 5 * 60
DEFAULT_DEV_ENDPOINT_CREATE_TIMEOUT = 15 * 60
DEFAULT_DEV_ENDPOINT_DELETE_TIMEOUT = 15 * 60

# time budget of a full lifecycle action driven by the ResourceProviderExecutor
DEFAULT_DEPLOY_LOOP_TIMEOUT = 20 * 60

# number of consecutive "not found" probe results tolerated while waiting for a target state
DEFAULT_NOT_FOUND_CHECKS = 20

# Credentials used in the test suite
TEST_AWS_ACCESS_KEY_ID = os.getenv("TEST_AWS_ACCESS_KEY_ID") or "test"
TEST_AWS_SECRET_ACCESS_KEY = os.getenv("TEST_AWS_SECRET_ACCESS_KEY") or "test"
TEST_AWS_REGION_NAME = os.getenv("TEST_AWS_REGION") or AWS_REGION_US_EAST_1
