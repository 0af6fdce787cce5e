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
from ..type_mapper import TypedefCycle, describe, resolve_terminal
from ._base import EntityEmitter


class TypedefEmitter(EntityEmitter):
    """A typedef becomes a thin wrapper around one value. It has no codec of
    its own, fields of a typedef'd type are encoded where they are used."""
    kind = "typedef"
    stdlib_imports = ("from dataclasses import dataclass, field as _field",)

    def emit_body(self, out: OutputAssembler) -> None:
        aliased = self.node.aliased_type
        try:
            resolve_terminal(self.node)
        except TypedefCycle as e:
            self.diagnostics.warn(f"{e} The wrapper of {self.typename} has no default.")

        declared = self.mapper.declaration(aliased)
        default, factory = self.default_for(aliased)

        out.append("@dataclass")
        out.append(f"class {self.name}:")
        with out.indented():
            out.append(f'"""IDL typedef {self.typename} of {describe(aliased)}."""')
            out.append()
            self.emit_metadata(out)
            out.append()
            if factory:
                out.append(f"value: {declared} = _field(default_factory=lambda: {default})")
            else:
                out.append(f"value: {declared} = {default}")
            out.append()

            out.append(f"def get_value(self) -> {declared}:")
            with out.indented():
                out.append("return self.value")
            out.append()

            out.append(f"def set_value(self, value: {declared}) -> None:")
            with out.indented():
                out.append("self.value = value")
