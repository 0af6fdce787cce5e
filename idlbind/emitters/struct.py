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

from ..assembler import OutputAssembler
from ..type_mapper import dynamic_kind
from ._base import EntityEmitter


class StructEmitter(EntityEmitter):
    """Emits a struct as a dataclass with one field per member, in
    declaration order, plus the generated codec:

    .. code-block:: python

        @dataclass(repr=False)
        class Point:
            __idl_field_order__ = ['x', 'y']
            x: types.int32 = 0
            y: types.int32 = 0

            def encode_into(self, buffer: Buffer) -> None:
                buffer.write('i', 4, self.x)
                buffer.write('i', 4, self.y)
    """
    kind = "struct"
    stdlib_imports = ("from dataclasses import dataclass, field as _field",)

    def emit_body(self, out: OutputAssembler) -> None:
        members = self.node.members
        names = self.member_names(members)

        if self.config.generate_compact_declaration_form:
            out.append("@dataclass(frozen=True, repr=False)")
        else:
            out.append("@dataclass(repr=False)")
        out.append(f"class {self.name}:")

        with out.indented():
            out.append(f'"""IDL struct {self.typename}."""')
            out.append()
            self.emit_metadata(out, members, names)
            out.append(f"__idl_field_order__ = {names!r}")
            out.append()

            for name, member in zip(names, members):
                with self.diagnostics.concerning(self.typename, name):
                    declared = self.mapper.declaration(member.type)
                    default, factory = self.default_for(member.type)
                if factory:
                    out.append(f"{name}: {declared} = _field(default_factory=lambda: {default})")
                else:
                    out.append(f"{name}: {declared} = {default}")
            if members:
                out.append()

            if not self.config.disable_codec_generation:
                self.emit_codec(out, names, members)

            self.emit_describe(out, names, members)
            self.emit_repr(out)

    def emit_codec(self, out: OutputAssembler, names, members) -> None:
        out.append("def encode(self) -> bytes:")
        with out.indented():
            out.append("buffer = Buffer()")
            out.append("self.encode_into(buffer)")
            out.append("return buffer.asbytes()")
        out.append()

        out.append("def encode_into(self, buffer: Buffer) -> None:")
        with out.indented():
            for name, member in zip(names, members):
                with self.diagnostics.concerning(self.typename, name):
                    self.codec.emit_encode(member.type, f"self.{name}", out)
            if not members:
                out.append("pass")
        out.append()

        out.append("@classmethod")
        out.append(f"def decode(cls, data: bytes) -> {self.name}:")
        with out.indented():
            out.append("return cls.decode_from(Buffer(data))")
        out.append()

        out.append("@classmethod")
        out.append(f"def decode_from(cls, buffer: Buffer) -> {self.name}:")
        with out.indented():
            out.append("values: Dict[str, Any] = {}")
            for name, member in zip(names, members):
                with self.diagnostics.concerning(self.typename, name):
                    self.codec.emit_decode(member.type, f"values[{name!r}]", out)
            out.append("return cls(**values)")
        out.append()

    def emit_describe(self, out: OutputAssembler, names, members) -> None:
        kinds = [(name, dynamic_kind(member.type)) for name, member in zip(names, members)]
        out.append("@classmethod")
        out.append("def describe_type(cls) -> Dict[str, Any]:")
        with out.indented():
            out.append("return {")
            with out.indented():
                out.append("'name': cls.__idl_typename__,")
                out.append("'kind': 'STRUCTURE',")
                out.append(f"'members': {kinds!r},")
                out.append("'annotations': cls.__idl_annotations__,")
                out.append("'topic': cls.__idl_topic__,")
            out.append("}")
        out.append()

    def emit_repr(self, out: OutputAssembler) -> None:
        out.append("def __repr__(self) -> str:")
        with out.indented():
            out.append(
                "return type(self).__name__ + '[' + ', '.join("
                "f'{name}={getattr(self, name)!r}' for name in self.__idl_field_order__) + ']'"
            )
