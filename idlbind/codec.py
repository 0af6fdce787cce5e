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

from typing import Dict, Optional

from .assembler import OutputAssembler
from .diagnostics import Diagnostics
from .namespace import entity_name, qualified_module
from .runtime.types import _type_code_size_mapping
from .tree import (
    Node, Primitive, PrimitiveKind, StringType, Sequence, Struct, Union, Enum_, Bitmask, Typedef
)
from .type_mapper import TypeMapper, TypedefCycle, describe, primitive_alias, resolve_terminal


class References:
    """Entities a generated unit refers to at runtime. Every other entity is
    reached through its module (``import a.B`` then ``a.B.B``) so units that
    refer to each other can be imported in any order. The unit's own entity
    is referred to by its bare class name."""

    def __init__(self, owner: Node, prefix: Optional[str] = None, owner_name: Optional[str] = None) -> None:
        self.owner = owner
        self.owner_name = owner_name or entity_name(owner)
        self.prefix = prefix
        self.modules: Dict[str, Node] = {}

    def qualify(self, node: Node) -> str:
        if node is self.owner:
            return self.owner_name
        module = qualified_module(node, self.prefix)
        self.modules.setdefault(module, node)
        return f"{module}.{entity_name(node)}"


class CodecGenerator:
    """Type-directed generation of the statements that move one value
    between an object and the ``buffer`` of a generated encode or decode
    method.

    Composite references delegate to the generated methods of the
    referenced entity, scalars, strings and sequences are written inline.
    Temporaries carry the nesting depth in their name so nested sequences
    never share a variable.
    """

    def __init__(self, mapper: TypeMapper, references: References, diagnostics: Optional[Diagnostics] = None) -> None:
        self.mapper = mapper
        self.references = references
        self.diagnostics = diagnostics if diagnostics is not None else mapper.diagnostics

    def _gap(self, node: Optional[Node], sink: OutputAssembler, reason: str, target: Optional[str] = None) -> None:
        self.diagnostics.warn(f"No codec rule for {describe(node)} ({reason}), statement skipped.")
        sink.append("pass" if target is None else f"{target} = None")

    @staticmethod
    def _code_size(node: Primitive):
        return _type_code_size_mapping[primitive_alias(node)]

    def emit_encode(self, node: Optional[Node], value: str, sink: OutputAssembler, depth: int = 0) -> None:
        if isinstance(node, Primitive):
            code, size = self._code_size(node)
            if node.kind == PrimitiveKind.CHAR:
                sink.append(f"buffer.write('{code}', {size}, ord({value}))")
            else:
                sink.append(f"buffer.write('{code}', {size}, {value})")
        elif isinstance(node, StringType):
            sink.append(f"if {value} is None:")
            with sink.indented():
                sink.append("buffer.write('i', 4, -1)")
            sink.append("else:")
            with sink.indented():
                sink.append(f"_b{depth} = {value}.encode('utf-8')")
                sink.append(f"buffer.write('i', 4, len(_b{depth}))")
                sink.append(f"buffer.write_bytes(_b{depth})")
        elif isinstance(node, Sequence):
            sink.append(f"if {value} is None:")
            with sink.indented():
                sink.append("buffer.write('i', 4, -1)")
            sink.append("else:")
            with sink.indented():
                sink.append(f"buffer.write('i', 4, len({value}))")
                sink.append(f"for _e{depth} in {value}:")
                with sink.indented():
                    self.emit_encode(node.element, f"_e{depth}", sink, depth + 1)
        elif isinstance(node, (Struct, Union)):
            self.references.qualify(node)
            sink.append(f"{value}.encode_into(buffer)")
        elif isinstance(node, Enum_):
            sink.append(f"buffer.write('i', 4, {value}.ordinal)")
        elif isinstance(node, Bitmask):
            sink.append(f"buffer.write('Q', 8, {value}.value)")
        elif isinstance(node, Typedef):
            try:
                resolve_terminal(node)
            except TypedefCycle as e:
                self._gap(node, sink, str(e))
                return
            self.emit_encode(node.aliased_type, f"{value}.value", sink, depth + 1)
        else:
            self._gap(node, sink, "unsupported type")

    def emit_decode(self, node: Optional[Node], target: str, sink: OutputAssembler, depth: int = 0) -> None:
        if isinstance(node, Primitive):
            code, size = self._code_size(node)
            if node.kind == PrimitiveKind.CHAR:
                sink.append(f"{target} = chr(buffer.read('{code}', {size}))")
            else:
                sink.append(f"{target} = buffer.read('{code}', {size})")
        elif isinstance(node, StringType):
            sink.append(f"_n{depth} = buffer.read('i', 4)")
            sink.append(f"{target} = None if _n{depth} < 0 else buffer.read_bytes(_n{depth}).decode('utf-8')")
        elif isinstance(node, Sequence):
            sink.append(f"_n{depth} = buffer.read('i', 4)")
            sink.append(f"if _n{depth} < 0:")
            with sink.indented():
                sink.append(f"{target} = None")
            sink.append("else:")
            with sink.indented():
                sink.append(f"_s{depth} = []")
                sink.append(f"for _ in range(_n{depth}):")
                with sink.indented():
                    self.emit_decode(node.element, f"_x{depth}", sink, depth + 1)
                    sink.append(f"_s{depth}.append(_x{depth})")
                if self.mapper.config.use_collection_for_sequences:
                    sink.append(f"{target} = _s{depth}")
                else:
                    sink.append(f"{target} = tuple(_s{depth})")
        elif isinstance(node, (Struct, Union)):
            sink.append(f"{target} = {self.references.qualify(node)}.decode_from(buffer)")
        elif isinstance(node, Enum_):
            sink.append(f"{target} = {self.references.qualify(node)}.from_ordinal(buffer.read('i', 4))")
        elif isinstance(node, Bitmask):
            sink.append(f"{target} = {self.references.qualify(node)}(value=buffer.read('Q', 8))")
        elif isinstance(node, Typedef):
            try:
                resolve_terminal(node)
            except TypedefCycle as e:
                self._gap(node, sink, str(e), target)
                return
            self.emit_decode(node.aliased_type, f"_t{depth}", sink, depth + 1)
            sink.append(f"{target} = {self.references.qualify(node)}(_t{depth})")
        else:
            self._gap(node, sink, "unsupported type", target)
