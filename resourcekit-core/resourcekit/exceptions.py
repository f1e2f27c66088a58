from typing import Any, Collection, Optional


class ResourceKitError(Exception):
    """Base class for all errors raised by resourcekit."""


class WaitError(ResourceKitError):
    """
    Base class of the errors raised while waiting for a resource to change its state.
    Carries the last state and payload observed by the status probe, so callers can inspect partial progress.
    """

    def __init__(self, message: str, last_state: str = "", payload: Any = None):
        super().__init__(message)
        self.message = message
        self.last_state = last_state
        self.payload = payload


class TransientProbeError(WaitError):
    """raise from a status probe to signal a temporary query failure, the probe will be called again"""

    def __init__(self, message: str = "transient status query failure"):
        super().__init__(message)


class UnexpectedStateError(WaitError):
    """The resource left the pending states, but did not reach any of the target states."""

    def __init__(
        self,
        last_state: str,
        payload: Any = None,
        expected: Collection[str] = (),
        reason: Optional[str] = None,
    ):
        self.expected = sorted(expected)
        self.reason = reason
        message = f"unexpected state '{last_state}', wanted target '{', '.join(self.expected)}'"
        if reason:
            message = f"{message}. last error: {reason}"
        super().__init__(message, last_state, payload)


class WaitTimeoutError(WaitError):
    """The resource remained in a pending state (or could not be queried) until the timeout elapsed."""

    def __init__(
        self,
        timeout: float,
        last_state: str = "",
        payload: Any = None,
        expected: Collection[str] = (),
        last_error: Optional[Exception] = None,
        reason: Optional[str] = None,
    ):
        self.timeout = timeout
        self.expected = sorted(expected)
        self.last_error = last_error
        self.reason = reason
        if self.expected:
            waiting_for = f"state to become '{', '.join(self.expected)}'"
        else:
            waiting_for = "resource to be gone"
        message = (
            f"timeout while waiting for {waiting_for} "
            f"(last state: '{last_state}', timeout: {timeout:g}s)"
        )
        if reason:
            message = f"{message}: {reason}"
        elif last_error is not None:
            message = f"{message}: {last_error}"
        super().__init__(message, last_state, payload)


class WaitCancelledError(WaitError):
    """The wait was cancelled by the caller before the resource reached a terminal state."""

    def __init__(self, last_state: str = "", payload: Any = None):
        super().__init__(
            f"wait cancelled (last state: '{last_state}')", last_state=last_state, payload=payload
        )


class ResourceNotFoundError(WaitError):
    """The resource (or its sub-configuration) does not exist (anymore)."""

    def __init__(self, message: str = "couldn't find resource", last_state: str = ""):
        super().__init__(message, last_state=last_state)


class MalformedIdentityError(ResourceKitError, ValueError):
    """A persisted resource id could not be parsed. Always fatal."""

    def __init__(self, identity: str, expected_shapes: Collection[str]):
        self.identity = identity
        self.expected_shapes = list(expected_shapes)
        super().__init__(
            f"unexpected format for ID ({identity}), expected {' or '.join(self.expected_shapes)}"
        )


class MalformedDocumentError(ResourceKitError, ValueError):
    """A configuration document violates the structure declared by its schema."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class ResourceOperationError(ResourceKitError):
    """
    A provider API call of a lifecycle operation failed. The original error is available as ``__cause__``.
    """

    def __init__(self, operation: str, identity: str, message: str):
        self.operation = operation
        self.identity = identity
        super().__init__(message)
