from resourcekit.mapping.document import ABSENT, Block, Repeated, Scalar, Singleton, is_absent
from resourcekit.mapping.schema import (
    BlockSchema,
    Field,
    NestedBlock,
    NestedBlockList,
    String,
    expand,
    flatten,
)

__all__ = [
    "ABSENT",
    "Block",
    "BlockSchema",
    "Field",
    "NestedBlock",
    "NestedBlockList",
    "Repeated",
    "Scalar",
    "Singleton",
    "String",
    "expand",
    "flatten",
    "is_absent",
]
