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
from ..namespace import safe_identifier
from ._base import EntityEmitter


class BitmaskEmitter(EntityEmitter):
    kind = "bitmask"
    stdlib_imports = ("from dataclasses import dataclass",)
    reserved_names = ("value", "is_set", "set_flag", "clear_flag", "describe_type")

    def emit_body(self, out: OutputAssembler) -> None:
        names = []
        for position, bit in enumerate(self.node.bit_values):
            name = safe_identifier(bit)
            if name in self.reserved_names:
                name += "_"
            if position > 63:
                self.diagnostics.warn(
                    f"Bit {bit} of {self.typename} is at position {position}, beyond the 64-bit value."
                )
            names.append(name)

        out.append("@dataclass(repr=False)")
        out.append(f"class {self.name}:")
        with out.indented():
            out.append(f'"""IDL bitmask {self.typename}."""')
            out.append()
            self.emit_metadata(out)
            out.append(f"__idl_bits__ = {names!r}")
            out.append()

            for position, name in enumerate(names):
                out.append(f"{name} = 1 << {position}")
            if names:
                out.append()

            out.append("value: types.uint64 = 0")
            out.append()

            out.append("def is_set(self, flag: int) -> bool:")
            with out.indented():
                out.append("return (self.value & flag) == flag")
            out.append()

            out.append("def set_flag(self, flag: int) -> None:")
            with out.indented():
                out.append("self.value |= flag")
            out.append()

            out.append("def clear_flag(self, flag: int) -> None:")
            with out.indented():
                out.append("self.value &= ~flag")
            out.append()

            out.append("@classmethod")
            out.append("def describe_type(cls) -> Dict[str, Any]:")
            with out.indented():
                out.append("return {")
                with out.indented():
                    out.append("'name': cls.__idl_typename__,")
                    out.append("'kind': 'BITMASK',")
                    out.append("'bits': {name: getattr(cls, name) for name in cls.__idl_bits__},")
                    out.append("'annotations': cls.__idl_annotations__,")
                out.append("}")
            out.append()

            out.append("def __repr__(self) -> str:")
            with out.indented():
                out.append("return type(self).__name__ + f'[value={self.value:#x}]'")
