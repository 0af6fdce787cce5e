"""
 * Copyright(c) 2021 to 2022 ZettaScale Technology and others
 *
 * This program and the accompanying materials are made available under the
 * terms of the Eclipse Public License v. 2.0 which is available at
 * http://www.eclipse.org/legal/epl-2.0, or the Eclipse Distribution License
 * v. 1.0 which is available at
 * http://www.eclipse.org/org/documents/edl-v10.php.
 *
 * SPDX-License-Identifier: EPL-2.0 OR BSD-3-Clause
"""

from typing import Optional, Tuple

from .config import GeneratorConfig
from .diagnostics import Diagnostics
from .namespace import entity_name, safe_identifier
from .runtime import types
from .tree import (
    Node, Primitive, PrimitiveKind, StringType, WideStringType, Sequence,
    Struct, Union, Enum_, Bitmask, Typedef
)


FALLBACK_TYPE = "Any"

# Attributes every generated enum defines itself
enum_reserved_names = ("name", "value", "ordinal", "from_ordinal", "describe_type")


# kind: (unboxed expression, boxed expression, runtime alias, default literal, dynamic kind)
primitive_mapping = {
    PrimitiveKind.BOOL: ("bool", "bool", bool, "False", "BOOLEAN"),
    PrimitiveKind.OCTET: ("types.uint8", "int", types.uint8, "0", "OCTET"),
    PrimitiveKind.CHAR: ("types.char", "str", types.char, "'\\x00'", "CHAR8"),
    PrimitiveKind.SHORT: ("types.int16", "int", types.int16, "0", "INT16"),
    PrimitiveKind.USHORT: ("types.uint16", "int", types.uint16, "0", "UINT16"),
    PrimitiveKind.LONG: ("types.int32", "int", types.int32, "0", "INT32"),
    PrimitiveKind.ULONG: ("types.uint32", "int", types.uint32, "0", "UINT32"),
    PrimitiveKind.LONGLONG: ("types.int64", "int", types.int64, "0", "INT64"),
    PrimitiveKind.ULONGLONG: ("types.uint64", "int", types.uint64, "0", "UINT64"),
    PrimitiveKind.FLOAT: ("types.float32", "float", types.float32, "0.0", "FLOAT32"),
    PrimitiveKind.DOUBLE: ("types.float64", "float", types.float64, "0.0", "FLOAT64"),
}


def primitive_alias(node: Primitive):
    """Runtime alias of a primitive, the key into the wire format table."""
    return primitive_mapping[node.kind][2]


class TypedefCycle(Exception):
    def __init__(self, typedef: Typedef) -> None:
        super().__init__(f"Typedef {typedef.name} is part of an alias cycle.")
        self.typedef = typedef


def resolve_terminal(node: Optional[Node]) -> Optional[Node]:
    """Follow typedef hops to the first non-typedef type. Returns None for a
    missing type and raises TypedefCycle when the chain loops."""
    seen = set()
    while isinstance(node, Typedef):
        if id(node) in seen:
            raise TypedefCycle(node)
        seen.add(id(node))
        node = node.aliased_type
    return node


def describe(node: Optional[Node]) -> str:
    """Short human readable description of a type, used in messages."""
    if node is None:
        return "unknown type"
    if isinstance(node, Primitive):
        return node.kind.value
    if isinstance(node, Sequence):
        return f"sequence<{describe(node.element)}>"
    if isinstance(node, StringType):
        return node.name
    kind = {Struct: "struct", Union: "union", Enum_: "enum", Bitmask: "bitmask", Typedef: "typedef"}
    return f"{kind.get(type(node), 'type')} {entity_name(node)}"


def dynamic_kind(node: Optional[Node]) -> str:
    """Dynamic type kind name of a type, as recorded by describe_type()."""
    if isinstance(node, Primitive):
        return primitive_mapping[node.kind][4]
    if isinstance(node, WideStringType):
        return "STRING16"
    return {
        StringType: "STRING8",
        Sequence: "SEQUENCE",
        Struct: "STRUCTURE",
        Union: "UNION",
        Enum_: "ENUM",
        Bitmask: "BITMASK",
        Typedef: "ALIAS",
    }.get(type(node), "UNKNOWN")


class TypeMapper:
    """Maps type tree nodes onto Python type expressions of generated code.

    Unboxed mappings use the width-carrying aliases of
    :mod:`idlbind.runtime.types`; boxed mappings are the plain Python types
    used as collection parameters. Entity references map to the simple name
    of the referenced class, which generated units import under that name.
    """

    def __init__(self, config: Optional[GeneratorConfig] = None, diagnostics: Optional[Diagnostics] = None) -> None:
        self.config = config or GeneratorConfig()
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    def map_type(self, node: Optional[Node], boxed: bool = False) -> str:
        if isinstance(node, Primitive):
            unboxed_name, boxed_name = primitive_mapping[node.kind][0:2]
            return boxed_name if boxed else unboxed_name
        elif isinstance(node, StringType):
            return "str"
        elif isinstance(node, Sequence):
            inner = self.map_type(node.element, boxed=True)
            if self.config.use_collection_for_sequences:
                return f"List[{inner}]"
            return f"Tuple[{inner}, ...]"
        elif isinstance(node, (Struct, Union, Enum_, Bitmask, Typedef)):
            return entity_name(node)

        self.diagnostics.warn(f"No type mapping for {describe(node)}, using {FALLBACK_TYPE}.")
        return FALLBACK_TYPE

    def is_nullable(self, node: Optional[Node]) -> bool:
        """Strings and sequences may be absent, their declarations accept None."""
        return isinstance(node, (StringType, Sequence))

    def declaration(self, node: Optional[Node]) -> str:
        mapped = self.map_type(node, boxed=False)
        if self.is_nullable(node):
            return f"Optional[{mapped}]"
        return mapped

    def default_value(self, node: Optional[Node], qualified: Optional[str] = None) -> Tuple[str, bool]:
        """Default for a declaration of ``node``. Returns the expression and
        whether it has to be wrapped in a default factory. ``qualified`` is
        the runtime reference of an entity class."""
        if isinstance(node, Primitive):
            return primitive_mapping[node.kind][3], False
        elif isinstance(node, (StringType, Sequence)):
            return "None", False
        elif isinstance(node, Enum_):
            if not node.enumerators:
                return "None", False
            return f"{qualified}.{self.enumerator_name(node, 0)}", True
        elif isinstance(node, (Struct, Union, Bitmask, Typedef)):
            return f"{qualified}()", True
        return "None", False

    def enumerator_name(self, node: Enum_, index: int) -> str:
        name = safe_identifier(node.enumerators[index])
        if name in enum_reserved_names:
            name += "_"
        return name
