from __future__ import annotations

import copy
import logging
import threading
from dataclasses import dataclass, field
from enum import Enum, auto
from logging import Logger
from typing import Any, Generic, Iterable, Mapping, Optional, Tuple, Type, TypeVar

from plux import Plugin, PluginManager

from resourcekit import config
from resourcekit.aws.connect import ServiceLevelClientFactory, connect_to
from resourcekit.exceptions import UnexpectedStateError
from resourcekit.utils.backoff import ExponentialBackoff
from resourcekit.utils.sync import wait_for_state

LOG = logging.getLogger(__name__)

Properties = TypeVar("Properties")

PUBLIC_REGISTRY: dict[str, Type[ResourceProvider]] = {}


class OperationStatus(Enum):
    PENDING = auto()
    IN_PROGRESS = auto()
    SUCCESS = auto()
    FAILED = auto()


@dataclass
class ProgressEvent(Generic[Properties]):
    status: OperationStatus
    resource_model: Properties

    message: str = ""
    result: Optional[str] = None
    error_code: Optional[str] = None
    custom_context: dict = field(default_factory=dict)


class ResourceData:
    """
    The configuration document of a single resource, as exchanged with the configuration framework.

    Only the keys declared by the resource type can be read or written. Besides the attributes, the document carries
    the id of the resource; an empty id means that the resource does not exist (anymore).
    """

    def __init__(
        self,
        keys: Iterable[str],
        values: Optional[Mapping[str, Any]] = None,
        id: str = "",
        is_new_resource: bool = False,
    ):
        self._keys = frozenset(keys)
        self._values: dict[str, Any] = {}
        self._id = id
        self._new_resource = is_new_resource

        for key, value in (values or {}).items():
            self.set(key, value)

    def _check_key(self, key: str):
        if key not in self._keys:
            raise KeyError(f"unknown attribute '{key}', expected one of {sorted(self._keys)}")

    def get(self, key: str) -> Any:
        self._check_key(key)
        return self._values.get(key)

    def get_ok(self, key: str) -> Tuple[Any, bool]:
        """Returns the value of the attribute, and whether it has been set explicitly (possibly to an empty value)."""
        self._check_key(key)
        return self._values.get(key), key in self._values

    def set(self, key: str, value: Any):
        self._check_key(key)
        self._values[key] = copy.deepcopy(value)

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, identity: str):
        self._id = identity

    @property
    def is_new_resource(self) -> bool:
        """Whether the resource is being created within the current lifecycle action."""
        return self._new_resource

    def mark_new_resource(self, new_resource: bool = True):
        self._new_resource = new_resource

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._values)

    def __repr__(self):
        return f"ResourceData(id={self._id!r}, values={self._values!r})"


@dataclass
class ResourceRequest(Generic[Properties]):
    aws_client_factory: ServiceLevelClientFactory
    resource_type: str
    action: str

    desired_state: ResourceData

    logger: Logger

    custom_context: dict = field(default_factory=dict)

    previous_state: Optional[dict[str, Any]] = None


class ResourceProviderPlugin(Plugin):
    """
    Base class for resource provider plugins.
    """

    namespace = "resourcekit.resource_providers"


class ResourceProvider(Generic[Properties]):
    """
    This provides a base class onto which service-specific resource providers are built.
    """

    TYPE: str
    PROPERTIES: Tuple[str, ...] = ()

    def create(self, request: ResourceRequest[Properties]) -> ProgressEvent[Properties]:
        raise NotImplementedError

    def read(self, request: ResourceRequest[Properties]) -> ProgressEvent[Properties]:
        raise NotImplementedError

    def update(self, request: ResourceRequest[Properties]) -> ProgressEvent[Properties]:
        raise NotImplementedError

    def delete(self, request: ResourceRequest[Properties]) -> ProgressEvent[Properties]:
        raise NotImplementedError

    @classmethod
    def new_resource_data(
        cls, values: Optional[Mapping[str, Any]] = None, id: str = ""
    ) -> ResourceData:
        """Creates an (empty) configuration document with the attributes of this resource type."""
        return ResourceData(cls.PROPERTIES, values, id=id)


def register_resource_provider(cls: Type[ResourceProvider]) -> Type[ResourceProvider]:
    """Class decorator making the resource provider available under its TYPE without going through plux."""
    PUBLIC_REGISTRY[cls.TYPE] = cls
    return cls


class NoResourceProvider(Exception):
    pass


class ResourceProviderExecutor:
    """
    Runs lifecycle actions ("create", "read", "update", "delete") of resource providers, and repeats them until the
    provider reports a final status.
    """

    def __init__(
        self,
        *,
        aws_client_factory: Optional[ServiceLevelClientFactory] = None,
        timeout: Optional[float] = None,
        backoff: Optional[ExponentialBackoff] = None,
    ):
        self.aws_client_factory = aws_client_factory or connect_to()
        self.timeout = timeout or config.DEPLOY_LOOP_TIMEOUT
        self.backoff = backoff

    def deploy_loop(
        self,
        resource_type: str,
        action: str,
        data: ResourceData,
        *,
        previous_state: Optional[dict[str, Any]] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> ProgressEvent:
        """
        Invokes the provider action until the returned progress event is neither PENDING nor IN_PROGRESS anymore.
        The custom context returned by one invocation is handed to the next one.

        :raises UnexpectedStateError: if the provider reports FAILED, the event message is the reason of the error
        :raises WaitTimeoutError: if the provider is still in progress when the timeout elapses
        :raises NoResourceProvider: if there is no provider for the resource type
        """
        try:
            resource_provider = self.load_resource_provider(resource_type)
        except NoResourceProvider:
            LOG.warning('No resource provider found for "%s"', resource_type)
            if config.IGNORE_UNSUPPORTED_RESOURCE_TYPES:
                return ProgressEvent(OperationStatus.SUCCESS, resource_model=data)
            raise

        if action == "create":
            data.mark_new_resource()

        context = {}

        def _invoke():
            request = ResourceRequest(
                aws_client_factory=self.aws_client_factory,
                resource_type=resource_type,
                action=action,
                desired_state=data,
                logger=LOG,
                custom_context=context,
                previous_state=previous_state,
            )
            event = self.execute_action(resource_provider, request)
            # update the shared state
            context.update(event.custom_context)
            return event, event.status.name

        try:
            event = wait_for_state(
                _invoke,
                pending=(OperationStatus.PENDING.name, OperationStatus.IN_PROGRESS.name),
                target=(OperationStatus.SUCCESS.name,),
                timeout=self.timeout,
                backoff=self.backoff,
                cancel_event=cancel_event,
                failure_reason=lambda e: e.message or e.error_code,
            )
        finally:
            # the resource is only new for the duration of its create action
            if action == "create":
                data.mark_new_resource(False)
        LOG.debug("%s of %s (id: %s) finished", action, resource_type, data.id)
        return event

    def execute_action(
        self, resource_provider: ResourceProvider, request: ResourceRequest
    ) -> ProgressEvent[Properties]:
        match request.action:
            case "create":
                return resource_provider.create(request)
            case "read":
                return resource_provider.read(request)
            case "update":
                try:
                    return resource_provider.update(request)
                except NotImplementedError:
                    LOG.warning(
                        'Unable to update resource type "%s", id "%s"',
                        request.resource_type,
                        request.desired_state.id,
                    )
                    return ProgressEvent(
                        status=OperationStatus.SUCCESS, resource_model=request.desired_state
                    )
            case "delete":
                return resource_provider.delete(request)
            case _:
                raise NotImplementedError(request.action)

    def load_resource_provider(self, resource_type: str) -> ResourceProvider:
        if resource_type in PUBLIC_REGISTRY:
            return PUBLIC_REGISTRY[resource_type]()

        try:
            plugin = plugin_manager.load(resource_type)
            return plugin.factory()
        except Exception:
            LOG.warning(
                "Failed to load resource type %s as a ResourceProvider.",
                resource_type,
                exc_info=LOG.isEnabledFor(logging.DEBUG),
            )
            raise NoResourceProvider


def is_failed_event(error: Exception) -> bool:
    """Whether the given error was raised because a provider reported a FAILED progress event."""
    return (
        isinstance(error, UnexpectedStateError)
        and error.last_state == OperationStatus.FAILED.name
    )


plugin_manager = PluginManager(ResourceProviderPlugin.namespace)
