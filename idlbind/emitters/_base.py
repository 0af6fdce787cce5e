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

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..annotations import field_markers, is_topic_type, tag
from ..assembler import OutputAssembler
from ..codec import CodecGenerator, References
from ..config import GeneratorConfig
from ..diagnostics import Diagnostics
from ..namespace import entity_name, resolve_namespace, safe_identifier, scoped_name
from ..tree import Member, Node, Struct, Union, Enum_, Bitmask, Typedef
from ..type_mapper import TypeMapper, TypedefCycle, resolve_terminal


logger = logging.getLogger(__name__)


@dataclass
class EmittedUnit:
    """One generated source file, ``path`` is relative to the output
    directory and always uses forward slashes."""
    path: str
    text: str
    kind: str
    name: str
    namespace: str

    @property
    def module(self) -> str:
        return f"{self.namespace}.{self.name}"


class EntityEmitter:
    """Shared machinery of the per-entity emitters.

    The body of the unit is generated first, into its own assembler, so the
    import section can list every entity the body ended up referring to.
    """
    kind = "entity"
    stdlib_imports: Tuple[str, ...] = ()
    reserved_names: Tuple[str, ...] = ("encode", "encode_into", "decode", "decode_from", "describe_type")

    def __init__(self, node: Node, config: Optional[GeneratorConfig] = None,
                 diagnostics: Optional[Diagnostics] = None, class_name: Optional[str] = None) -> None:
        self.node = node
        self.config = config or GeneratorConfig()
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        if not node.name and class_name is None:
            self.diagnostics.warn(f"Anonymous {self.kind}, emitted as {entity_name(node)}.")
        self.name = class_name or entity_name(node)
        self.namespace = resolve_namespace(node, self.config.namespace_prefix)
        self.typename = scoped_name(node)
        self.mapper = TypeMapper(self.config, self.diagnostics)
        self.references = References(node, self.config.namespace_prefix, self.name)
        self.codec = CodecGenerator(self.mapper, self.references, self.diagnostics)

    @property
    def path(self) -> str:
        return "/".join(self.namespace.split(".") + [self.name + ".py"])

    def emit(self) -> EmittedUnit:
        body = OutputAssembler()
        self.emit_body(body)

        out = OutputAssembler()
        self.emit_header(out)
        out.append()
        out.append()
        out.extend(body)

        logger.debug(f"Emitted {self.kind} {self.typename} as {self.path}")
        return EmittedUnit(self.path, out.text(), self.kind, self.name, self.namespace)

    def emit_body(self, out: OutputAssembler) -> None:
        raise NotImplementedError()

    def emit_header(self, out: OutputAssembler) -> None:
        out.append('"""')
        out.append(f"  Generated by idlbind from IDL {self.kind} {self.typename}.")
        out.append("  Changes to this file are lost when it is regenerated.")
        out.append('"""')
        out.append()
        out.append("from __future__ import annotations")
        out.append()
        for line in self.stdlib_imports:
            out.append(line)
        out.append("from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple")
        out.append()
        out.append("from idlbind.runtime import Buffer, types")

        modules = sorted(self.references.modules.items())
        if modules:
            out.append()
            for module, _ in modules:
                out.append(f"import {module}")
            out.append()
            out.append("if TYPE_CHECKING:")
            with out.indented():
                for module, node in modules:
                    out.append(f"from {module} import {entity_name(node)}")

    # Helpers shared by the emitters

    def member_names(self, members: List[Member]) -> List[str]:
        names = []
        for i, member in enumerate(members):
            if member.name:
                name = safe_identifier(member.name)
                if name in self.reserved_names:
                    name += "_"
                names.append(name)
            else:
                fallback = f"unnamed_{i}"
                self.diagnostics.warn(f"Member {i} of {self.typename} has no name, using {fallback}.")
                names.append(fallback)
        return names

    def default_for(self, node: Optional[Node]) -> Tuple[str, bool]:
        if isinstance(node, Typedef):
            try:
                resolve_terminal(node)
            except TypedefCycle:
                return "None", False
        qualified = None
        if isinstance(node, (Struct, Union, Enum_, Bitmask, Typedef)):
            qualified = self.references.qualify(node)
        return self.mapper.default_value(node, qualified)

    def emit_metadata(self, out: OutputAssembler, members: Optional[List[Member]] = None,
                      names: Optional[List[str]] = None) -> None:
        out.append(f"__idl_typename__ = {self.typename!r}")
        out.append(f"__idl_annotations__ = {tag(self.node)!r}")
        if members is not None:
            out.append(f"__idl_field_annotations__ = {field_markers(members, names)!r}")
        out.append(f"__idl_topic__ = {is_topic_type(self.node)!r}")
