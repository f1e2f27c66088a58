"""
Status adapters connect an AWS "describe" operation to the polling engine in ``resourcekit.utils.sync``.

An adapter knows how to build the request for a resource id, where the state lives in the response, and which error
codes mean that the resource does not exist. The actual waiters are plain functions on top of an adapter, see for
example ``resourcekit.services.glue.waiters``.
"""
import logging
import threading
from typing import Any, Callable, Collection, Dict, Optional, Tuple

from botocore.client import BaseClient
from botocore.exceptions import ClientError

from resourcekit.aws.errors import error_code_equals, is_transient_error
from resourcekit.utils.backoff import ExponentialBackoff
from resourcekit.utils.sync import Probe, wait_for_state

LOG = logging.getLogger(__name__)

RequestBuilder = Callable[[str], Dict[str, Any]]
StateExtractor = Callable[[Dict[str, Any]], Tuple[Any, Optional[str]]]


def extract_member(member: str, *path: str) -> StateExtractor:
    """
    Builds a state extractor reading the state from ``member`` of the (nested) structure at ``path``, e.g.
    ``extract_member("State", "Trigger")`` returns ``(response["Trigger"], response["Trigger"]["State"])``.
    The payload is None if the structure at ``path`` is missing.
    """

    def _extract(response: Dict[str, Any]) -> Tuple[Any, Optional[str]]:
        payload = response
        for key in path:
            payload = payload.get(key) if payload else None
        if payload is None:
            return None, ""
        return payload, payload.get(member)

    return _extract


class StatusAdapter:
    """
    Queries the status of a single resource.

    :param operation: name of the client method, e.g. ``get_trigger``
    :param build_request: builds the keyword arguments of the operation from the resource id
    :param extract_state: returns the payload and the state string from the response
    :param not_found_codes: error codes which mean that the resource does not exist
    :param is_transient_error: classifies the errors of the operation which are retried until the timeout
    """

    def __init__(
        self,
        operation: str,
        build_request: RequestBuilder,
        extract_state: StateExtractor,
        not_found_codes: Collection[str] = (),
        is_transient_error: Callable[[Exception], bool] = is_transient_error,
    ):
        self.operation = operation
        self.build_request = build_request
        self.extract_state = extract_state
        self.not_found_codes = tuple(not_found_codes)
        self.is_transient_error = is_transient_error

    def status(self, client: BaseClient, resource_id: str) -> Probe:
        """Returns a probe which reports ``(payload, state)``, or ``(None, "")`` if the resource does not exist."""
        operation = getattr(client, self.operation)

        def _probe():
            try:
                response = operation(**self.build_request(resource_id))
            except ClientError as e:
                if self.not_found_codes and error_code_equals(e, *self.not_found_codes):
                    LOG.debug("%s of %s: resource not found", self.operation, resource_id)
                    return None, ""
                raise

            payload, state = self.extract_state(response)
            if payload is None:
                return None, ""
            return payload, state or ""

        return _probe

    def wait(
        self,
        client: BaseClient,
        resource_id: str,
        pending: Collection[str],
        target: Collection[str],
        timeout: float,
        *,
        backoff: Optional[ExponentialBackoff] = None,
        cancel_event: Optional[threading.Event] = None,
        failure_reason: Optional[Callable[[Any], Optional[str]]] = None,
        not_found_checks: Optional[int] = None,
    ) -> Any:
        LOG.debug(
            "Waiting for %s to leave %s (operation %s, timeout %ss)",
            resource_id,
            sorted(pending),
            self.operation,
            timeout,
        )
        return wait_for_state(
            self.status(client, resource_id),
            pending,
            target,
            timeout,
            backoff=backoff,
            cancel_event=cancel_event,
            failure_reason=failure_reason,
            is_transient_error=self.is_transient_error,
            not_found_checks=not_found_checks,
        )

    def __repr__(self):
        return f"{self.__class__.__name__}({self.operation!r})"
