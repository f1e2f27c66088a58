"""
Waiters for the asynchronous operations of AWS Glue.

Each waiter polls the corresponding "get" operation of the Glue API until the resource leaves its transitional
states. Waiters for deletions succeed as soon as Glue reports the resource as not found (EntityNotFoundException).
"""
import logging
import threading
from typing import Optional

from botocore.client import BaseClient

from resourcekit import config
from resourcekit.aws.api.glue import (
    DevEndpoint,
    DevEndpointStatus,
    ErrorCode,
    GetMLTransformResponse,
    GetRegistryResponse,
    GetSchemaResponse,
    GetSchemaVersionResponse,
    RegistryStatus,
    SchemaStatus,
    SchemaVersionStatus,
    TransformStatusType,
    Trigger,
    TriggerState,
)
from resourcekit.aws.waiter import StatusAdapter, extract_member
from resourcekit.config import WaiterTimeouts
from resourcekit.utils.backoff import ExponentialBackoff
from resourcekit.utils.sync import Probe

LOG = logging.getLogger(__name__)

NOT_FOUND_ERROR_CODES = (ErrorCode.EntityNotFoundException,)

ML_TRANSFORM_STATUS = StatusAdapter(
    "get_ml_transform",
    lambda transform_id: {"TransformId": transform_id},
    extract_member("Status"),
    not_found_codes=NOT_FOUND_ERROR_CODES,
)

REGISTRY_STATUS = StatusAdapter(
    "get_registry",
    lambda registry_arn: {"RegistryId": {"RegistryArn": registry_arn}},
    extract_member("Status"),
    not_found_codes=NOT_FOUND_ERROR_CODES,
)

SCHEMA_STATUS = StatusAdapter(
    "get_schema",
    lambda schema_arn: {"SchemaId": {"SchemaArn": schema_arn}},
    extract_member("SchemaStatus"),
    not_found_codes=NOT_FOUND_ERROR_CODES,
)

SCHEMA_VERSION_STATUS = StatusAdapter(
    "get_schema_version",
    lambda schema_arn: {
        "SchemaId": {"SchemaArn": schema_arn},
        "SchemaVersionNumber": {"LatestVersion": True},
    },
    extract_member("Status"),
    not_found_codes=NOT_FOUND_ERROR_CODES,
)

TRIGGER_STATUS = StatusAdapter(
    "get_trigger",
    lambda name: {"Name": name},
    extract_member("State", "Trigger"),
    not_found_codes=NOT_FOUND_ERROR_CODES,
)

DEV_ENDPOINT_STATUS = StatusAdapter(
    "get_dev_endpoint",
    lambda name: {"EndpointName": name},
    extract_member("Status", "DevEndpoint"),
    not_found_codes=NOT_FOUND_ERROR_CODES,
)


def ml_transform_status(client: BaseClient, transform_id: str) -> Probe:
    return ML_TRANSFORM_STATUS.status(client, transform_id)


def registry_status(client: BaseClient, registry_arn: str) -> Probe:
    return REGISTRY_STATUS.status(client, registry_arn)


def schema_status(client: BaseClient, schema_arn: str) -> Probe:
    return SCHEMA_STATUS.status(client, schema_arn)


def schema_version_status(client: BaseClient, schema_arn: str) -> Probe:
    """Status of the latest version of the given schema."""
    return SCHEMA_VERSION_STATUS.status(client, schema_arn)


def trigger_status(client: BaseClient, name: str) -> Probe:
    return TRIGGER_STATUS.status(client, name)


def dev_endpoint_status(client: BaseClient, name: str) -> Probe:
    return DEV_ENDPOINT_STATUS.status(client, name)


def _dev_endpoint_failure_reason(endpoint: DevEndpoint) -> Optional[str]:
    if endpoint.get("Status") == DevEndpointStatus.FAILED:
        return endpoint.get("FailureReason")
    return None


def _timeouts(timeouts: Optional[WaiterTimeouts]) -> WaiterTimeouts:
    return timeouts or config.WAITER_TIMEOUTS


def ml_transform_deleted(
    client: BaseClient,
    transform_id: str,
    timeouts: Optional[WaiterTimeouts] = None,
    *,
    backoff: Optional[ExponentialBackoff] = None,
    cancel_event: Optional[threading.Event] = None,
) -> Optional[GetMLTransformResponse]:
    return ML_TRANSFORM_STATUS.wait(
        client,
        transform_id,
        pending=(
            TransformStatusType.NOT_READY,
            TransformStatusType.READY,
            TransformStatusType.DELETING,
        ),
        target=(),
        timeout=_timeouts(timeouts).ml_transform_delete,
        backoff=backoff,
        cancel_event=cancel_event,
    )


def registry_deleted(
    client: BaseClient,
    registry_arn: str,
    timeouts: Optional[WaiterTimeouts] = None,
    *,
    backoff: Optional[ExponentialBackoff] = None,
    cancel_event: Optional[threading.Event] = None,
) -> Optional[GetRegistryResponse]:
    return REGISTRY_STATUS.wait(
        client,
        registry_arn,
        pending=(RegistryStatus.DELETING,),
        target=(),
        timeout=_timeouts(timeouts).registry_delete,
        backoff=backoff,
        cancel_event=cancel_event,
    )


def schema_available(
    client: BaseClient,
    schema_arn: str,
    timeouts: Optional[WaiterTimeouts] = None,
    *,
    backoff: Optional[ExponentialBackoff] = None,
    cancel_event: Optional[threading.Event] = None,
) -> Optional[GetSchemaResponse]:
    return SCHEMA_STATUS.wait(
        client,
        schema_arn,
        pending=(SchemaStatus.PENDING,),
        target=(SchemaStatus.AVAILABLE,),
        timeout=_timeouts(timeouts).schema_available,
        backoff=backoff,
        cancel_event=cancel_event,
    )


def schema_deleted(
    client: BaseClient,
    schema_arn: str,
    timeouts: Optional[WaiterTimeouts] = None,
    *,
    backoff: Optional[ExponentialBackoff] = None,
    cancel_event: Optional[threading.Event] = None,
) -> Optional[GetSchemaResponse]:
    return SCHEMA_STATUS.wait(
        client,
        schema_arn,
        pending=(SchemaStatus.DELETING,),
        target=(),
        timeout=_timeouts(timeouts).schema_delete,
        backoff=backoff,
        cancel_event=cancel_event,
    )


def schema_version_available(
    client: BaseClient,
    schema_arn: str,
    timeouts: Optional[WaiterTimeouts] = None,
    *,
    backoff: Optional[ExponentialBackoff] = None,
    cancel_event: Optional[threading.Event] = None,
) -> Optional[GetSchemaVersionResponse]:
    return SCHEMA_VERSION_STATUS.wait(
        client,
        schema_arn,
        pending=(SchemaVersionStatus.PENDING,),
        target=(SchemaVersionStatus.AVAILABLE,),
        timeout=_timeouts(timeouts).schema_version_available,
        backoff=backoff,
        cancel_event=cancel_event,
    )


def trigger_created(
    client: BaseClient,
    name: str,
    timeouts: Optional[WaiterTimeouts] = None,
    *,
    backoff: Optional[ExponentialBackoff] = None,
    cancel_event: Optional[threading.Event] = None,
) -> Optional[Trigger]:
    return TRIGGER_STATUS.wait(
        client,
        name,
        pending=(TriggerState.ACTIVATING, TriggerState.CREATING, TriggerState.UPDATING),
        target=(TriggerState.ACTIVATED, TriggerState.CREATED),
        timeout=_timeouts(timeouts).trigger_create,
        backoff=backoff,
        cancel_event=cancel_event,
    )


def trigger_deleted(
    client: BaseClient,
    name: str,
    timeouts: Optional[WaiterTimeouts] = None,
    *,
    backoff: Optional[ExponentialBackoff] = None,
    cancel_event: Optional[threading.Event] = None,
) -> Optional[Trigger]:
    return TRIGGER_STATUS.wait(
        client,
        name,
        pending=(TriggerState.DELETING,),
        target=(),
        timeout=_timeouts(timeouts).trigger_delete,
        backoff=backoff,
        cancel_event=cancel_event,
    )


def dev_endpoint_created(
    client: BaseClient,
    name: str,
    timeouts: Optional[WaiterTimeouts] = None,
    *,
    backoff: Optional[ExponentialBackoff] = None,
    cancel_event: Optional[threading.Event] = None,
) -> Optional[DevEndpoint]:
    return DEV_ENDPOINT_STATUS.wait(
        client,
        name,
        pending=(DevEndpointStatus.PROVISIONING,),
        target=(DevEndpointStatus.READY,),
        timeout=_timeouts(timeouts).dev_endpoint_create,
        backoff=backoff,
        cancel_event=cancel_event,
        failure_reason=_dev_endpoint_failure_reason,
    )


def dev_endpoint_deleted(
    client: BaseClient,
    name: str,
    timeouts: Optional[WaiterTimeouts] = None,
    *,
    backoff: Optional[ExponentialBackoff] = None,
    cancel_event: Optional[threading.Event] = None,
) -> Optional[DevEndpoint]:
    """
    Waits until the dev endpoint is gone. An endpoint which ends up FAILED while terminating counts as deleted,
    its payload is returned.
    """
    return DEV_ENDPOINT_STATUS.wait(
        client,
        name,
        pending=(DevEndpointStatus.TERMINATING,),
        target=(),
        timeout=_timeouts(timeouts).dev_endpoint_delete,
        backoff=backoff,
        cancel_event=cancel_event,
    )

