"""Helpers to classify the errors raised by the AWS clients"""

import logging
import threading
from typing import Callable, Collection, Optional, TypeVar

from botocore.exceptions import ClientError, ConnectionError, HTTPClientError

from resourcekit.exceptions import TransientProbeError, WaitTimeoutError
from resourcekit.utils.backoff import ExponentialBackoff
from resourcekit.utils.sync import wait_for_state

LOG = logging.getLogger(__name__)

T = TypeVar("T")

THROTTLING_ERROR_CODES = {
    "Throttling",
    "ThrottlingException",
    "ThrottledException",
    "RequestThrottledException",
    "TooManyRequestsException",
    "ProvisionedThroughputExceededException",
    "TransactionInProgressException",
    "RequestLimitExceeded",
    "BandwidthLimitExceeded",
    "LimitExceededException",
    "RequestThrottled",
    "SlowDown",
    "PriorRequestNotComplete",
    "EC2ThrottledException",
}

SERVICE_ERROR_CODES = {
    "InternalError",
    "InternalFailure",
    "InternalServiceException",
    "ServiceUnavailable",
    "ServiceUnavailableException",
    "OperationTimeoutException",
    "RequestTimeout",
    "RequestTimeoutException",
}


def get_error_code(error: Exception) -> Optional[str]:
    """Returns the AWS error code of the given error, or None if it does not carry one."""
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code")
    return getattr(error, "code", None)


def error_code_equals(error: Exception, *codes: str) -> bool:
    """Whether the given error carries exactly one of the given AWS error codes."""
    code = get_error_code(error)
    return code is not None and code in codes


def is_transient_error(error: Exception) -> bool:
    """
    Whether the given error is a temporary failure which is worth retrying: throttling, internal service errors
    (5xx), connection issues, or a ``TransientProbeError`` raised by a status probe.
    """
    if isinstance(error, TransientProbeError):
        return True
    if isinstance(error, (ConnectionError, HTTPClientError)):
        return True
    if not isinstance(error, ClientError):
        return False

    code = get_error_code(error)
    if code in THROTTLING_ERROR_CODES or code in SERVICE_ERROR_CODES:
        return True
    status_code = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode") or 0
    return status_code >= 500


def retry_on_aws_code(
    codes: Collection[str],
    fn: Callable[[], T],
    timeout: float,
    *,
    backoff: Optional[ExponentialBackoff] = None,
    cancel_event: Optional[threading.Event] = None,
) -> T:
    """
    Calls ``fn`` until it does not fail with one of the given AWS error codes anymore, which is how eventual
    consistency of the AWS APIs is handled (e.g. a freshly created bucket which is not visible yet).

    :param codes: the error codes which are retried
    :param fn: the API call
    :param timeout: the time budget in seconds
    :return: the result of ``fn``
    :raises: the last error raised by ``fn`` if it still fails when the timeout elapses, or any error which does
        not carry one of ``codes`` immediately
    """
    codes = tuple(codes)
    result = []

    def _call():
        result.append(fn())
        return True, "done"

    def _is_retryable(error: Exception) -> bool:
        if error_code_equals(error, *codes):
            LOG.debug("Retrying call after error with code %s: %s", get_error_code(error), error)
            return True
        return False

    try:
        wait_for_state(
            _call,
            pending=(),
            target=("done",),
            timeout=timeout,
            backoff=backoff,
            cancel_event=cancel_event,
            is_transient_error=_is_retryable,
        )
    except WaitTimeoutError as e:
        if e.last_error is not None:
            raise e.last_error
        raise

    return result[-1]
