"""Polling utilities to wait for asynchronous provider operations"""

import dataclasses
import logging
import threading
import time
from typing import Any, Callable, Collection, Optional, Tuple, TypeVar

from resourcekit import config
from resourcekit.exceptions import (
    ResourceNotFoundError,
    TransientProbeError,
    UnexpectedStateError,
    WaitCancelledError,
    WaitTimeoutError,
)
from resourcekit.utils.backoff import ExponentialBackoff

LOG = logging.getLogger(__name__)

T = TypeVar("T")

# a status probe returns the current payload of the resource and its state,
# a payload of None means that the resource does not exist
Probe = Callable[[], Tuple[Optional[T], str]]


def is_transient_probe_error(error: Exception) -> bool:
    return isinstance(error, TransientProbeError)


def wait_for_state(
    probe: Probe,
    pending: Collection[str],
    target: Collection[str],
    timeout: float,
    *,
    backoff: Optional[ExponentialBackoff] = None,
    cancel_event: Optional[threading.Event] = None,
    failure_reason: Optional[Callable[[Any], Optional[str]]] = None,
    is_transient_error: Optional[Callable[[Exception], bool]] = None,
    not_found_checks: Optional[int] = None,
) -> Optional[T]:
    """
    Calls the given probe until the state it reports is not one of the ``pending`` states anymore. The first poll
    happens immediately, the following ones are delayed by ``backoff`` (but never past the deadline).

    The wait succeeds if the final state is in ``target``, or if ``target`` is empty (any non-pending state counts as
    done). An empty ``target`` additionally accepts a probe result without payload, which is how probes report
    that a resource is gone (the waiter then returns None).

    :param probe: returns ``(payload, state)``, or ``(None, "")`` if the resource does not exist
    :param pending: states in which the probe is called again
    :param target: states which end the wait successfully
    :param timeout: the time budget in seconds
    :param backoff: the delays between two polls, defaults to ``config.default_backoff()``. The instance is
        copied, so it can be shared between waits
    :param cancel_event: set this event to stop waiting; the probe call in flight is not interrupted
    :param failure_reason: extracts a human-readable reason from the last payload, attached to errors
    :param is_transient_error: decides whether an exception raised by the probe is retried (until the timeout)
        or re-raised immediately. By default, only ``TransientProbeError`` is retried.
    :param not_found_checks: how many consecutive "not found" results are tolerated for a non-empty target
    :return: the last payload returned by the probe
    :raises UnexpectedStateError: if the probe reports a state which is neither pending nor a target
    :raises WaitTimeoutError: if the resource is still pending when the timeout elapses
    :raises WaitCancelledError: if the cancel event was set before the resource reached a terminal state
    :raises ResourceNotFoundError: if the resource was not found too many times in a row
    """
    pending = frozenset(pending)
    target = frozenset(target)
    # every wait polls with its own backoff state, a given instance only provides the settings
    backoff = dataclasses.replace(backoff) if backoff else config.default_backoff()
    backoff.reset()
    cancel_event = cancel_event or threading.Event()
    is_transient_error = is_transient_error or is_transient_probe_error
    if not_found_checks is None:
        not_found_checks = config.WAITER_NOT_FOUND_CHECKS

    deadline = time.monotonic() + timeout
    last_state = ""
    last_payload = None
    last_error = None
    not_found_count = 0
    attempt = 0

    while not cancel_event.is_set():
        attempt += 1
        try:
            payload, state = probe()
        except Exception as e:
            if not is_transient_error(e):
                raise
            LOG.debug("Retrying status query after transient error (attempt %s): %s", attempt, e)
            last_error = e
        else:
            last_error = None
            if payload is None:
                if not target:
                    LOG.debug("Resource is gone (attempt %s)", attempt)
                    return None

                not_found_count += 1
                if not_found_count > not_found_checks:
                    raise ResourceNotFoundError(
                        f"couldn't find resource ({not_found_checks} retries)",
                        last_state=last_state,
                    )
                LOG.debug("Resource not found (%s/%s)", not_found_count, not_found_checks)
            else:
                not_found_count = 0
                last_state, last_payload = state, payload
                LOG.debug("Observed state '%s' (attempt %s)", state, attempt)

                if state not in pending:
                    if not target or state in target:
                        return payload

                    raise UnexpectedStateError(
                        state,
                        payload,
                        expected=target,
                        reason=_extract_reason(failure_reason, payload),
                    )

        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise WaitTimeoutError(
                timeout,
                last_state,
                last_payload,
                expected=target,
                last_error=last_error,
                reason=_extract_reason(failure_reason, last_payload),
            ) from last_error

        delay = backoff.next_backoff() or backoff.max_interval
        if cancel_event.wait(min(delay, remaining)):
            break

    raise WaitCancelledError(last_state, last_payload)


def _extract_reason(
    failure_reason: Optional[Callable[[Any], Optional[str]]], payload: Any
) -> Optional[str]:
    if failure_reason is None or payload is None:
        return None
    return failure_reason(payload)
