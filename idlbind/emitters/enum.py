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
from ._base import EntityEmitter


class EnumEmitter(EntityEmitter):
    """Enumerators take their declaration position as value, literal values
    given in the source are not consulted."""
    kind = "enum"
    stdlib_imports = ("from enum import Enum",)

    def enumerator_names(self):
        return [self.mapper.enumerator_name(self.node, i) for i in range(len(self.node.enumerators))]

    def emit_body(self, out: OutputAssembler) -> None:
        names = self.enumerator_names()

        out.append(f"class {self.name}(Enum):")
        with out.indented():
            out.append(f'"""IDL enum {self.typename}."""')
            out.append()
            self.emit_metadata(out)
            out.append()

            for ordinal, name in enumerate(names):
                out.append(f"{name} = {ordinal}")
            if names:
                out.append()

            out.append("@property")
            out.append("def ordinal(self) -> int:")
            with out.indented():
                out.append("return self.value")
            out.append()

            out.append("@classmethod")
            out.append(f"def from_ordinal(cls, ordinal: int) -> {self.name}:")
            with out.indented():
                out.append("return cls(ordinal)")
            out.append()

            out.append("@classmethod")
            out.append("def describe_type(cls) -> Dict[str, Any]:")
            with out.indented():
                out.append("return {")
                with out.indented():
                    out.append("'name': cls.__idl_typename__,")
                    out.append("'kind': 'ENUM',")
                    out.append("'enumerators': [e.name for e in cls],")
                    out.append("'annotations': cls.__idl_annotations__,")
                out.append("}")
