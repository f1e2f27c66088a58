"""
Declarative mapping between configuration documents and provider API structures.

A ``BlockSchema`` maps the keys of a configuration block to fields. Every field knows the name of the
corresponding API member and implements four conversions::

    raw configuration --load--> Block --expand--> API value
    raw configuration <--dump-- Block <--flatten-- API value

``expand`` returns None for values that must be omitted from the API request (instead of being sent as a zero
value), ``flatten`` returns ``ABSENT`` for API members which are not set.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from resourcekit.exceptions import MalformedDocumentError
from resourcekit.mapping.document import ABSENT, Block, Repeated, Scalar, Singleton

LOG = logging.getLogger(__name__)


def _join(path: str, key: Any) -> str:
    return f"{path}.{key}" if path else str(key)


def _coercion_failed(path: str, expected: str, raw: Any, strict: bool) -> Block:
    if strict:
        raise MalformedDocumentError(path, f"expected {expected}, got {type(raw).__name__}")
    LOG.debug("Ignoring value of unexpected type at %s (expected %s): %r", path, expected, raw)
    return ABSENT


class Field(ABC):
    api_name: str

    def __init__(self, api_name: str):
        self.api_name = api_name

    @abstractmethod
    def load(self, raw: Any, path: str = "", strict: bool = False) -> Block:
        """Converts a raw configuration value into a typed block."""

    @abstractmethod
    def dump(self, block: Block) -> Any:
        """Converts a typed block into its raw configuration value."""

    @abstractmethod
    def expand(self, block: Block) -> Any:
        """Converts a typed block into the API value, or None if the API member must be omitted."""

    @abstractmethod
    def flatten(self, value: Any) -> Block:
        """Converts an API value into a typed block."""

    def __repr__(self):
        return f"{self.__class__.__name__}({self.api_name!r})"


class String(Field):
    """A scalar string attribute. Empty strings are never sent to the API."""

    def load(self, raw: Any, path: str = "", strict: bool = False) -> Block:
        if raw is None:
            return ABSENT
        if not isinstance(raw, str):
            return _coercion_failed(path, "a string", raw, strict)
        return Scalar(raw)

    def dump(self, block: Block) -> Optional[str]:
        if block is ABSENT:
            return None
        return block.value

    def expand(self, block: Block) -> Optional[str]:
        if isinstance(block, Scalar) and block.value:
            return block.value
        return None

    def flatten(self, value: Any) -> Block:
        if value is None:
            return ABSENT
        return Scalar(value if isinstance(value, str) else str(value))


class BlockSchema:
    """The keys of one block element, and the field each of them maps to."""

    def __init__(self, fields: Mapping[str, Field]):
        self.fields: Dict[str, Field] = dict(fields)

    def keys(self):
        return self.fields.keys()

    def load_element(self, raw: Mapping, path: str = "", strict: bool = False) -> Singleton:
        loaded = {}
        for key, field in self.fields.items():
            block = field.load(raw.get(key), _join(path, key), strict)
            if block is not ABSENT:
                loaded[key] = block
        return Singleton(loaded)

    def dump_element(self, element: Singleton) -> Dict[str, Any]:
        # unset keys are left out entirely, they are never written as empty values
        return {
            key: self.fields[key].dump(block)
            for key, block in element.fields.items()
            if block is not ABSENT and key in self.fields
        }

    def expand_element(self, element: Singleton) -> Dict[str, Any]:
        result = {}
        for key, field in self.fields.items():
            value = field.expand(element.get(key))
            if value is not None:
                result[field.api_name] = value
        return result

    def flatten_element(self, value: Mapping) -> Singleton:
        flattened = {}
        for key, field in self.fields.items():
            block = field.flatten(value.get(field.api_name))
            if block is not ABSENT:
                flattened[key] = block
        return Singleton(flattened)


class NestedBlock(Field):
    """
    A block with at most one element, e.g. ``index_document = [{"suffix": "index.html"}]``.
    An empty list (or a list holding only None) means the block is not configured.
    """

    def __init__(self, api_name: str, schema: BlockSchema):
        super().__init__(api_name)
        self.schema = schema

    def load(self, raw: Any, path: str = "", strict: bool = False) -> Block:
        if raw is None:
            return ABSENT
        if not isinstance(raw, (list, tuple)):
            return _coercion_failed(path, "a list of blocks", raw, strict)
        if len(raw) > 1:
            raise MalformedDocumentError(path, f"expected at most one block, got {len(raw)}")
        if not raw or raw[0] is None:
            return ABSENT
        if not isinstance(raw[0], Mapping):
            return _coercion_failed(_join(path, 0), "a block", raw[0], strict)
        return self.schema.load_element(raw[0], _join(path, 0), strict)

    def dump(self, block: Block) -> List[Dict[str, Any]]:
        if block is ABSENT:
            return []
        return [self.schema.dump_element(block)]

    def expand(self, block: Block) -> Optional[Dict[str, Any]]:
        if block is ABSENT:
            return None
        return self.schema.expand_element(block)

    def flatten(self, value: Any) -> Block:
        if value is None:
            return ABSENT
        return self.schema.flatten_element(value)


class NestedBlockList(Field):
    """
    An ordered list of blocks, e.g. routing rules. Every element is mapped independently; elements which are not
    blocks are skipped, unless strict loading is requested.
    """

    def __init__(self, api_name: str, schema: BlockSchema):
        super().__init__(api_name)
        self.schema = schema

    def load(self, raw: Any, path: str = "", strict: bool = False) -> Block:
        if raw is None:
            return ABSENT
        if not isinstance(raw, (list, tuple)):
            return _coercion_failed(path, "a list of blocks", raw, strict)
        if not raw:
            return ABSENT

        items = []
        for index, element in enumerate(raw):
            if not isinstance(element, Mapping):
                _coercion_failed(_join(path, index), "a block", element, strict)
                continue
            items.append(self.schema.load_element(element, _join(path, index), strict))
        return Repeated(items)

    def dump(self, block: Block) -> List[Dict[str, Any]]:
        if block is ABSENT:
            return []
        return [self.schema.dump_element(item) for item in block]

    def expand(self, block: Block) -> Optional[List[Dict[str, Any]]]:
        if block is ABSENT or not block:
            return None
        return [self.schema.expand_element(item) for item in block]

    def flatten(self, value: Any) -> Block:
        if not value:
            return ABSENT
        items = [self.schema.flatten_element(item) for item in value if item is not None]
        return Repeated(items) if items else ABSENT


def expand(field: Field, raw: Any, path: str = "", strict: bool = False) -> Any:
    """Maps a raw configuration value to the API value (None: omit the API member)."""
    return field.expand(field.load(raw, path, strict))


def flatten(field: Field, value: Any) -> Any:
    """Maps an API value to the raw configuration value."""
    return field.dump(field.flatten(value))
