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

from enum import Enum
from typing import Any, Iterator, List, Optional, Sequence as _Sequence, Union as _Union


class PrimitiveKind(Enum):
    """Primitive kinds of the type tree, valued by their IDL spelling."""
    BOOL = "boolean"
    OCTET = "octet"
    CHAR = "char"
    SHORT = "short"
    USHORT = "unsigned short"
    LONG = "long"
    ULONG = "unsigned long"
    LONGLONG = "long long"
    ULONGLONG = "unsigned long long"
    FLOAT = "float"
    DOUBLE = "double"


class Node:
    """Base of every tree node. Nodes are built once by the producer of the
    tree and only read afterwards; ``parent`` is filled in by the enclosing
    scope."""

    def __init__(self, name: Optional[str] = None, annotations: Optional[_Sequence[str]] = None) -> None:
        self.name = name
        self.annotations: List[str] = list(annotations or [])
        self.parent: Optional['Node'] = None

    def has_annotation(self, name: str) -> bool:
        return name in self.annotations

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


class Primitive(Node):
    def __init__(self, kind: PrimitiveKind) -> None:
        super().__init__(kind.value)
        self.kind = kind

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Primitive) and other.kind == self.kind

    def __hash__(self) -> int:
        return hash(self.kind)

    def __repr__(self) -> str:
        return f"Primitive({self.kind.name})"


class StringType(Node):
    def __init__(self) -> None:
        super().__init__("string")

    def __eq__(self, other: Any) -> bool:
        return type(other) is type(self)

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return "StringType()"


class WideStringType(StringType):
    def __init__(self) -> None:
        Node.__init__(self, "wstring")

    def __repr__(self) -> str:
        return "WideStringType()"


class Sequence(Node):
    def __init__(self, element: 'TypeNode') -> None:
        super().__init__("sequence")
        self.element = element

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Sequence) and other.element == self.element

    def __hash__(self) -> int:
        return hash(("sequence", self.element))

    def __repr__(self) -> str:
        return f"Sequence({self.element!r})"


class Member(Node):
    def __init__(self, name: Optional[str], type: Optional['TypeNode'],
                 annotations: Optional[_Sequence[str]] = None) -> None:
        super().__init__(name, annotations)
        self.type = type


class Struct(Node):
    def __init__(self, name: Optional[str], members: Optional[_Sequence[Member]] = None,
                 annotations: Optional[_Sequence[str]] = None) -> None:
        super().__init__(name, annotations)
        self.members: List[Member] = list(members or [])
        for member in self.members:
            member.parent = self


class Case:
    """One union branch. ``labels`` holds the literal case labels (ints,
    bools, single characters or enumerator names); ``is_default`` marks the
    ``default:`` branch, which may also carry labels."""

    def __init__(self, member: Member, labels: Optional[_Sequence[Any]] = None, is_default: bool = False) -> None:
        self.member = member
        self.labels: List[Any] = list(labels or [])
        self.is_default = is_default

    def __repr__(self) -> str:
        return f"Case({self.member.name!r}, labels={self.labels!r}, default={self.is_default})"


class Union(Node):
    def __init__(self, name: Optional[str], discriminant_type: Optional['TypeNode'],
                 cases: Optional[_Sequence[Case]] = None,
                 annotations: Optional[_Sequence[str]] = None) -> None:
        super().__init__(name, annotations)
        self.discriminant_type = discriminant_type
        self.cases: List[Case] = list(cases or [])
        for case in self.cases:
            case.member.parent = self

    @property
    def default_case(self) -> Optional[Case]:
        for case in self.cases:
            if case.is_default:
                return case
        return None


class Enum_(Node):
    def __init__(self, name: Optional[str], enumerators: Optional[_Sequence[str]] = None,
                 annotations: Optional[_Sequence[str]] = None) -> None:
        super().__init__(name, annotations)
        self.enumerators: List[str] = list(enumerators or [])


class Bitmask(Node):
    def __init__(self, name: Optional[str], bit_values: Optional[_Sequence[str]] = None,
                 annotations: Optional[_Sequence[str]] = None) -> None:
        super().__init__(name, annotations)
        self.bit_values: List[str] = list(bit_values or [])


class Typedef(Node):
    def __init__(self, name: Optional[str], aliased_type: Optional['TypeNode'] = None,
                 annotations: Optional[_Sequence[str]] = None) -> None:
        super().__init__(name, annotations)
        self.aliased_type = aliased_type


class Module(Node):
    def __init__(self, name: Optional[str], definitions: Optional[_Sequence[Node]] = None,
                 annotations: Optional[_Sequence[str]] = None) -> None:
        super().__init__(name, annotations)
        self.definitions: List[Node] = []
        for definition in definitions or []:
            self.add(definition)

    def add(self, definition: Node) -> Node:
        definition.parent = self
        self.definitions.append(definition)
        return definition

    def walk(self) -> Iterator[Node]:
        """Depth-first iteration over every definition below this module,
        modules included, in declaration order."""
        for definition in self.definitions:
            yield definition
            if isinstance(definition, Module):
                yield from definition.walk()


Entity = _Union[Struct, Union, Enum_, Bitmask, Typedef]
TypeNode = _Union[Primitive, StringType, Sequence, Struct, Union, Enum_, Bitmask, Typedef]
ENTITY_TYPES = (Struct, Union, Enum_, Bitmask, Typedef)


def is_entity(node: Any) -> bool:
    return isinstance(node, ENTITY_TYPES)


# Shared primitive instances, the tree treats them as values.
boolean = Primitive(PrimitiveKind.BOOL)
octet = Primitive(PrimitiveKind.OCTET)
char = Primitive(PrimitiveKind.CHAR)
short = Primitive(PrimitiveKind.SHORT)
ushort = Primitive(PrimitiveKind.USHORT)
long = Primitive(PrimitiveKind.LONG)
ulong = Primitive(PrimitiveKind.ULONG)
longlong = Primitive(PrimitiveKind.LONGLONG)
ulonglong = Primitive(PrimitiveKind.ULONGLONG)
float_ = Primitive(PrimitiveKind.FLOAT)
double = Primitive(PrimitiveKind.DOUBLE)
string = StringType()
wstring = WideStringType()


__all__ = [
    "PrimitiveKind", "Node", "Primitive", "StringType", "WideStringType", "Sequence",
    "Member", "Struct", "Case", "Union", "Enum_", "Bitmask", "Typedef", "Module",
    "Entity", "TypeNode", "ENTITY_TYPES", "is_entity",
    "boolean", "octet", "char", "short", "ushort", "long", "ulong", "longlong",
    "ulonglong", "float_", "double", "string", "wstring"
]
