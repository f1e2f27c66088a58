"""
Composite resource ids, e.g. ``my-bucket`` or ``my-bucket,123456789012``.

The id is persisted by the configuration framework and used to re-locate a resource across read, update and
delete, so its format must stay stable.
"""
from dataclasses import dataclass
from typing import Tuple

from resourcekit.constants import RESOURCE_ID_SEPARATOR
from resourcekit.exceptions import MalformedIdentityError


@dataclass(frozen=True)
class IdentityFormat:
    """
    Formats and parses ids made of a required first and an optional second component.

    :param first: name of the first component, used in error messages (e.g. ``BUCKET``)
    :param second: name of the optional second component (e.g. ``EXPECTED_BUCKET_OWNER``)
    :param delimiter: the separator between both components
    """

    first: str = "NAME"
    second: str = "OWNER"
    delimiter: str = RESOURCE_ID_SEPARATOR

    @property
    def shapes(self) -> Tuple[str, str]:
        return self.first, f"{self.first}{self.delimiter}{self.second}"

    def format(self, first: str, second: str = "") -> str:
        if not first:
            return second
        if not second:
            return first
        return self.delimiter.join([first, second])

    def parse(self, identity: str) -> Tuple[str, str]:
        parts = identity.split(self.delimiter)

        if len(parts) == 1 and parts[0]:
            return parts[0], ""

        if len(parts) == 2 and parts[0] and parts[1]:
            return parts[0], parts[1]

        raise MalformedIdentityError(identity, self.shapes)


DEFAULT_IDENTITY_FORMAT = IdentityFormat()


def format_identity(first: str, second: str = "") -> str:
    return DEFAULT_IDENTITY_FORMAT.format(first, second)


def parse_identity(identity: str) -> Tuple[str, str]:
    return DEFAULT_IDENTITY_FORMAT.parse(identity)
