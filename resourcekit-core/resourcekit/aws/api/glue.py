from datetime import datetime
from typing import Dict, List, Optional, TypedDict

GenericString = str
NameString = str
HashString = str
GlueResourceArn = str
SchemaRegistryNameString = str
SchemaVersionIdString = str
VersionLongNumber = int
TimestampValue = datetime


class ErrorCode(str):
    EntityNotFoundException = "EntityNotFoundException"
    InternalServiceException = "InternalServiceException"
    OperationTimeoutException = "OperationTimeoutException"
    ConcurrentModificationException = "ConcurrentModificationException"


class RegistryStatus(str):
    AVAILABLE = "AVAILABLE"
    DELETING = "DELETING"


class SchemaStatus(str):
    AVAILABLE = "AVAILABLE"
    PENDING = "PENDING"
    DELETING = "DELETING"


class SchemaVersionStatus(str):
    AVAILABLE = "AVAILABLE"
    PENDING = "PENDING"
    FAILURE = "FAILURE"
    DELETING = "DELETING"


class TransformStatusType(str):
    NOT_READY = "NOT_READY"
    READY = "READY"
    DELETING = "DELETING"


class TriggerState(str):
    CREATING = "CREATING"
    CREATED = "CREATED"
    ACTIVATING = "ACTIVATING"
    ACTIVATED = "ACTIVATED"
    DEACTIVATING = "DEACTIVATING"
    DEACTIVATED = "DEACTIVATED"
    DELETING = "DELETING"
    UPDATING = "UPDATING"


class DevEndpointStatus(str):
    # not modelled as an enum by the Glue API, but documented values of DevEndpoint.Status
    PROVISIONING = "PROVISIONING"
    READY = "READY"
    FAILED = "FAILED"
    TERMINATING = "TERMINATING"


class Trigger(TypedDict, total=False):
    Name: Optional[NameString]
    WorkflowName: Optional[NameString]
    Id: Optional[GenericString]
    Type: Optional[GenericString]
    State: Optional[TriggerState]
    Description: Optional[GenericString]
    Schedule: Optional[GenericString]


class DevEndpoint(TypedDict, total=False):
    EndpointName: Optional[GenericString]
    RoleArn: Optional[GenericString]
    Status: Optional[GenericString]
    FailureReason: Optional[GenericString]
    LastUpdateStatus: Optional[GenericString]
    GlueVersion: Optional[GenericString]
    CreatedTimestamp: Optional[TimestampValue]
    LastModifiedTimestamp: Optional[TimestampValue]
    Arguments: Optional[Dict[GenericString, GenericString]]


class GetTriggerResponse(TypedDict, total=False):
    Trigger: Optional[Trigger]


class GetDevEndpointResponse(TypedDict, total=False):
    DevEndpoint: Optional[DevEndpoint]


class GetMLTransformResponse(TypedDict, total=False):
    TransformId: Optional[HashString]
    Name: Optional[NameString]
    Status: Optional[TransformStatusType]
    CreatedOn: Optional[TimestampValue]
    LastModifiedOn: Optional[TimestampValue]


class GetRegistryResponse(TypedDict, total=False):
    RegistryName: Optional[SchemaRegistryNameString]
    RegistryArn: Optional[GlueResourceArn]
    Description: Optional[GenericString]
    Status: Optional[RegistryStatus]


class GetSchemaResponse(TypedDict, total=False):
    RegistryName: Optional[SchemaRegistryNameString]
    RegistryArn: Optional[GlueResourceArn]
    SchemaName: Optional[SchemaRegistryNameString]
    SchemaArn: Optional[GlueResourceArn]
    LatestSchemaVersion: Optional[VersionLongNumber]
    NextSchemaVersion: Optional[VersionLongNumber]
    SchemaStatus: Optional[SchemaStatus]


class GetSchemaVersionResponse(TypedDict, total=False):
    SchemaVersionId: Optional[SchemaVersionIdString]
    SchemaArn: Optional[GlueResourceArn]
    VersionNumber: Optional[VersionLongNumber]
    Status: Optional[SchemaVersionStatus]


TriggerList = List[Trigger]
