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

from typing import Any, Dict, List, Optional, Set, Tuple

from ..assembler import OutputAssembler
from ..tree import Case, Enum_, Node, Primitive, PrimitiveKind
from ..type_mapper import TypedefCycle, dynamic_kind, resolve_terminal
from ._base import EntityEmitter


# struct format code, size, first candidate for a free default label, step, last candidate
discriminator_storage = {
    PrimitiveKind.BOOL: ('B', 1, 1, -1, 0),
    PrimitiveKind.CHAR: ('B', 1, 0, 1, 255),
    PrimitiveKind.OCTET: ('B', 1, 0, 1, 255),
    PrimitiveKind.SHORT: ('h', 2, -1, -1, -32768),
    PrimitiveKind.USHORT: ('H', 2, 0, 1, 65535),
    PrimitiveKind.LONG: ('i', 4, -1, -1, -2147483648),
    PrimitiveKind.ULONG: ('I', 4, 0, 1, 4294967295),
    PrimitiveKind.LONGLONG: ('q', 8, -1, -1, -9223372036854775808),
    PrimitiveKind.ULONGLONG: ('Q', 8, 0, 1, 18446744073709551615),
}
default_storage = ('i', 4, 0, 1, 2147483647)


class UnionEmitter(EntityEmitter):
    """Emits a union as a tagged variant: a discriminator plus one slot per
    case of which at most one is populated. The label table maps every case
    label onto the name of its case; a discriminator without a label selects
    the default case, if there is one, and no case otherwise.

    Discriminators are always stored as integers, bool labels as 0 and 1,
    char labels as their code point and enumerator labels as their ordinal.
    """
    kind = "union"
    reserved_names = EntityEmitter.reserved_names + ("discriminator", "value", "active", "get", "set")

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.terminal: Optional[Node] = None
        try:
            self.terminal = resolve_terminal(self.node.discriminant_type)
        except TypedefCycle as e:
            self.diagnostics.warn(f"Discriminator of {self.typename}: {e}")
        self.storage = self.discriminator_storage()

    def discriminator_storage(self) -> Tuple[str, int, int, int, int]:
        if isinstance(self.terminal, Primitive) and self.terminal.kind in discriminator_storage:
            return discriminator_storage[self.terminal.kind]
        if not isinstance(self.terminal, Enum_):
            self.diagnostics.warn(
                f"Discriminator of {self.typename} is not an integral type, stored as 32-bit integer."
            )
        return default_storage

    def label_value(self, label: Any) -> Optional[int]:
        terminal = self.terminal
        if isinstance(terminal, Enum_):
            name = label.split("::")[-1] if isinstance(label, str) else None
            if name in terminal.enumerators:
                return terminal.enumerators.index(name)
            if isinstance(label, int) and not isinstance(label, bool):
                return label
        elif isinstance(label, bool):
            return int(label)
        elif isinstance(label, int):
            return label
        elif isinstance(label, str) and len(label) == 1:
            return ord(label)
        self.diagnostics.warn(f"Label {label!r} of {self.typename} does not fit its discriminator, ignored.")
        return None

    def label_table(self, names: List[str]) -> Tuple[Dict[int, str], List[List[int]]]:
        table: Dict[int, str] = {}
        per_case: List[List[int]] = []
        for name, case in zip(names, self.node.cases):
            values = []
            for label in case.labels:
                value = self.label_value(label)
                if value is None:
                    continue
                if value in table:
                    self.diagnostics.warn(
                        f"Label {label!r} of {self.typename} is used by {table[value]} and {name}, "
                        f"selecting {table[value]}."
                    )
                    continue
                table[value] = name
                values.append(value)
            per_case.append(values)
        return table, per_case

    def default_discriminator(self, used: Set[int]) -> int:
        """Smallest free discriminator value, the search runs the same way as
        for unions declared at runtime."""
        if isinstance(self.terminal, Enum_):
            i = 0
            while i in used:
                i += 1
            return i

        _, _, val, inc, end = self.storage
        while True:
            if val not in used:
                return val
            if val == end:
                self.diagnostics.warn(f"No free discriminator value left in {self.typename}.")
                return min(used)
            val += inc

    def emit_body(self, out: OutputAssembler) -> None:
        cases: List[Case] = self.node.cases
        names = self.member_names([c.member for c in cases])
        table, per_case = self.label_table(names)
        default_case: Optional[str] = None
        for name, case in zip(names, cases):
            if case.is_default:
                default_case = name
        for name, case, labels in zip(names, cases, per_case):
            if not labels and not case.is_default:
                self.diagnostics.warn(f"Case {name} of {self.typename} has no label and can never be selected.")
        default_discriminator = self.default_discriminator(set(table))
        selected = table.get(default_discriminator, default_case)
        code, size = self.storage[0:2]

        out.append(f"class {self.name}:")
        with out.indented():
            out.append(f'"""IDL union {self.typename}."""')
            out.append()
            self.emit_metadata(out, [c.member for c in cases], names)
            out.append(f"__idl_field_order__ = {names!r}")
            out.append(f"__idl_cases__ = {table!r}")
            out.append(f"__idl_default_case__ = {default_case!r}")
            out.append(f"__idl_default_discriminator__ = {default_discriminator!r}")
            out.append()

            self.emit_init(out, names, cases, selected)
            self.emit_selection(out, names, cases, per_case)
            if not self.config.disable_codec_generation:
                self.emit_codec(out, names, cases, per_case, default_case, code, size)
            self.emit_dunders(out, names, cases)

    def emit_init(self, out: OutputAssembler, names: List[str], cases: List[Case], selected: Optional[str]) -> None:
        """Without arguments the default discriminator is selected, and the
        case it selects holds the default value of its type."""
        initial = None
        if selected is not None:
            member = cases[names.index(selected)].member
            # A union holding itself by value would recurse on construction.
            if member.type is not self.node:
                with self.diagnostics.concerning(self.typename, selected):
                    initial, _ = self.default_for(member.type)
                if initial == "None":
                    initial = None

        out.append("def __init__(self, discriminator: Optional[int] = None, value: Any = None, **case: Any) -> None:")
        with out.indented():
            for name, case in zip(names, cases):
                with self.diagnostics.concerning(self.typename, name):
                    mapped = self.mapper.map_type(case.member.type)
                out.append(f"self.{name}: Optional[{mapped}] = None")
            out.append("self.discriminator: int = self.__idl_default_discriminator__")
            out.append("if case:")
            with out.indented():
                out.append("if discriminator is not None or value is not None or len(case) > 1:")
                with out.indented():
                    out.append("raise TypeError('Initialize a union with one case or with discriminator and value.')")
                out.append("name, case_value = next(iter(case.items()))")
                out.append("if name not in self.__idl_field_order__:")
                with out.indented():
                    out.append("raise TypeError(f'{name} is not a case of ' + type(self).__name__)")
                out.append("getattr(self, 'set' + name[0].upper() + name[1:])(case_value)")
            out.append("elif discriminator is not None:")
            with out.indented():
                out.append("self.set(discriminator, value)")
            if initial is not None:
                out.append("else:")
                with out.indented():
                    out.append(f"self.{selected} = {initial}")
        out.append()

    def emit_selection(self, out: OutputAssembler, names: List[str], cases: List[Case], per_case) -> None:
        out.append("@property")
        out.append("def active(self) -> Optional[str]:")
        with out.indented():
            out.append("return self.__idl_cases__.get(self.discriminator, self.__idl_default_case__)")
        out.append()

        out.append("@property")
        out.append("def value(self) -> Any:")
        with out.indented():
            out.append("active = self.active")
            out.append("return None if active is None else getattr(self, active)")
        out.append()

        out.append("def get(self) -> Any:")
        with out.indented():
            out.append("return self.value")
        out.append()

        out.append("def set(self, discriminator: int, value: Any) -> None:")
        with out.indented():
            out.append("for name in self.__idl_field_order__:")
            with out.indented():
                out.append("setattr(self, name, None)")
            out.append("self.discriminator = discriminator")
            out.append("active = self.active")
            out.append("if active is not None:")
            with out.indented():
                out.append("setattr(self, active, value)")
        out.append()

        for name, case, labels in zip(names, cases, per_case):
            setter = "set" + name[0].upper() + name[1:]
            with self.diagnostics.concerning(self.typename, name):
                mapped = self.mapper.map_type(case.member.type)
            out.append(f"def {setter}(self, value: {mapped}) -> None:")
            with out.indented():
                if labels:
                    out.append(f"self.set({labels[0]!r}, value)")
                elif case.is_default:
                    out.append("self.set(self.__idl_default_discriminator__, value)")
                else:
                    out.append(
                        f"raise ValueError('Case {name} of ' + type(self).__name__ + ' has no label and cannot be selected.')"
                    )
            out.append()

    def emit_codec(self, out: OutputAssembler, names: List[str], cases: List[Case], per_case,
                   default_case: Optional[str], code: str, size: int) -> None:
        out.append("def encode(self) -> bytes:")
        with out.indented():
            out.append("buffer = Buffer()")
            out.append("self.encode_into(buffer)")
            out.append("return buffer.asbytes()")
        out.append()

        out.append("def encode_into(self, buffer: Buffer) -> None:")
        with out.indented():
            out.append("populated = [name for name in self.__idl_field_order__ if getattr(self, name) is not None]")
            out.append("if len(populated) > 1:")
            with out.indented():
                out.append("raise ValueError('More than one case of ' + type(self).__name__ + ' is set: ' + ', '.join(populated))")
            out.append(f"buffer.write('{code}', {size}, self.discriminator)")
            self._dispatch(out, "self", names, cases, per_case, default_case, self._encode_case)
        out.append()

        out.append("@classmethod")
        out.append(f"def decode(cls, data: bytes) -> {self.name}:")
        with out.indented():
            out.append("return cls.decode_from(Buffer(data))")
        out.append()

        out.append("@classmethod")
        out.append(f"def decode_from(cls, buffer: Buffer) -> {self.name}:")
        with out.indented():
            out.append("union = cls()")
            out.append(f"union.set(buffer.read('{code}', {size}), None)")
            self._dispatch(out, "union", names, cases, per_case, default_case, self._decode_case)
            out.append("return union")
        out.append()

    def _dispatch(self, out: OutputAssembler, subject: str, names, cases, per_case, default_case, body) -> None:
        first = True
        for name, case, labels in zip(names, cases, per_case):
            if not labels:
                continue
            keyword = "if" if first else "elif"
            out.append(f"{keyword} {subject}.discriminator in {tuple(labels)!r}:")
            with out.indented():
                body(out, name, case)
            first = False

        if default_case is not None:
            case = cases[names.index(default_case)]
            if first:
                body(out, default_case, case)
            else:
                out.append("else:")
                with out.indented():
                    body(out, default_case, case)

    def _encode_case(self, out: OutputAssembler, name: str, case: Case) -> None:
        if not self.mapper.is_nullable(case.member.type):
            out.append(f"if self.{name} is None:")
            with out.indented():
                out.append(f"raise ValueError('Case {name} of ' + type(self).__name__ + ' is selected but not set.')")
        with self.diagnostics.concerning(self.typename, name):
            self.codec.emit_encode(case.member.type, f"self.{name}", out)

    def _decode_case(self, out: OutputAssembler, name: str, case: Case) -> None:
        with self.diagnostics.concerning(self.typename, name):
            self.codec.emit_decode(case.member.type, f"union.{name}", out)

    def emit_dunders(self, out: OutputAssembler, names: List[str], cases: List[Case]) -> None:
        out.append("def __eq__(self, other: Any) -> bool:")
        with out.indented():
            out.append("if type(other) is not type(self):")
            with out.indented():
                out.append("return NotImplemented")
            out.append("return self.discriminator == other.discriminator and self.value == other.value")
        out.append()

        out.append("def __repr__(self) -> str:")
        with out.indented():
            out.append(
                "return type(self).__name__ + f'[discriminator={self.discriminator!r}, "
                "{self.active}={self.value!r}]'"
            )
        out.append()

        kinds = [(name, dynamic_kind(case.member.type)) for name, case in zip(names, cases)]
        out.append("@classmethod")
        out.append("def describe_type(cls) -> Dict[str, Any]:")
        with out.indented():
            out.append("return {")
            with out.indented():
                out.append("'name': cls.__idl_typename__,")
                out.append("'kind': 'UNION',")
                out.append(f"'discriminator': {dynamic_kind(self.terminal)!r},")
                out.append(f"'members': {kinds!r},")
                out.append("'annotations': cls.__idl_annotations__,")
                out.append("'topic': cls.__idl_topic__,")
            out.append("}")
