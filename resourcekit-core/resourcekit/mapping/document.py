"""
Typed representation of configuration documents.

A configuration document, as handed out by a declarative configuration framework, is a loosely typed tree of
lists and dicts. Inside resourcekit it is represented as a tree of ``Block`` values:

- ``Scalar``: a string value (which may be empty)
- ``Singleton``: a block with at most one element, i.e. a mapping of keys to blocks
- ``Repeated``: an ordered list of block elements (e.g. routing rules)
- ``ABSENT``: the value was not set at all. This is distinct from ``Scalar("")``.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Union


class _Absent:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "ABSENT"

    def __reduce__(self):
        return _Absent, ()


ABSENT = _Absent()


@dataclass(frozen=True)
class Scalar:
    value: str


@dataclass
class Singleton:
    fields: Dict[str, "Block"] = field(default_factory=dict)

    def get(self, key: str) -> "Block":
        return self.fields.get(key, ABSENT)

    def __contains__(self, key: str) -> bool:
        return self.fields.get(key, ABSENT) is not ABSENT


@dataclass
class Repeated:
    items: List[Singleton] = field(default_factory=list)

    def __iter__(self) -> Iterator[Singleton]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


Block = Union[_Absent, Scalar, Singleton, Repeated]


def is_absent(block: Block) -> bool:
    return block is ABSENT
