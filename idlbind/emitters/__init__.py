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

from typing import Optional

from ..config import GeneratorConfig
from ..diagnostics import Diagnostics
from ..tree import Node, Struct, Union, Enum_, Bitmask, Typedef
from ._base import EmittedUnit, EntityEmitter
from .struct import StructEmitter
from .union import UnionEmitter
from .enum import EnumEmitter
from .bitmask import BitmaskEmitter
from .typedef import TypedefEmitter


emitters = {
    Struct: StructEmitter,
    Union: UnionEmitter,
    Enum_: EnumEmitter,
    Bitmask: BitmaskEmitter,
    Typedef: TypedefEmitter,
}


def emitter_for(node: Node, config: Optional[GeneratorConfig] = None,
                diagnostics: Optional[Diagnostics] = None, class_name: Optional[str] = None) -> EntityEmitter:
    for cls, emitter in emitters.items():
        if isinstance(node, cls):
            return emitter(node, config, diagnostics, class_name)
    raise TypeError(f"{node!r} is not an emittable entity.")


def emit_entity(node: Node, config: Optional[GeneratorConfig] = None,
                diagnostics: Optional[Diagnostics] = None, class_name: Optional[str] = None) -> EmittedUnit:
    """Generate the complete unit of one entity."""
    return emitter_for(node, config, diagnostics, class_name).emit()


def emit_struct(node: Struct, config: Optional[GeneratorConfig] = None,
                diagnostics: Optional[Diagnostics] = None, class_name: Optional[str] = None) -> EmittedUnit:
    return StructEmitter(node, config, diagnostics, class_name).emit()


def emit_union(node: Union, config: Optional[GeneratorConfig] = None,
               diagnostics: Optional[Diagnostics] = None, class_name: Optional[str] = None) -> EmittedUnit:
    return UnionEmitter(node, config, diagnostics, class_name).emit()


def emit_enum(node: Enum_, config: Optional[GeneratorConfig] = None,
              diagnostics: Optional[Diagnostics] = None, class_name: Optional[str] = None) -> EmittedUnit:
    return EnumEmitter(node, config, diagnostics, class_name).emit()


def emit_bitmask(node: Bitmask, config: Optional[GeneratorConfig] = None,
                 diagnostics: Optional[Diagnostics] = None, class_name: Optional[str] = None) -> EmittedUnit:
    return BitmaskEmitter(node, config, diagnostics, class_name).emit()


def emit_typedef(node: Typedef, config: Optional[GeneratorConfig] = None,
                 diagnostics: Optional[Diagnostics] = None, class_name: Optional[str] = None) -> EmittedUnit:
    return TypedefEmitter(node, config, diagnostics, class_name).emit()


__all__ = [
    "EmittedUnit", "EntityEmitter", "StructEmitter", "UnionEmitter", "EnumEmitter",
    "BitmaskEmitter", "TypedefEmitter", "emitter_for", "emit_entity", "emit_struct",
    "emit_union", "emit_enum", "emit_bitmask", "emit_typedef"
]
