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

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class GeneratorConfig:
    """Options of one generation run. An instance is passed explicitly to
    every emitter, there is no process-wide configuration.

    Attributes
    ----------
    output_directory: str
        Directory below which emitted units are written.
    namespace_prefix: Optional[str]
        Dotted prefix prepended to every resolved namespace.
    use_collection_for_sequences: bool
        Declare and decode sequences as lists. When False tuples are used.
    disable_codec_generation: bool
        Skip the encode/decode methods of structs and unions.
    generate_compact_declaration_form: bool
        Emit structs as frozen, record-like dataclasses.
    """
    output_directory: str = "."
    namespace_prefix: Optional[str] = None
    use_collection_for_sequences: bool = True
    disable_codec_generation: bool = False
    generate_compact_declaration_form: bool = False

    def evolve(self, **changes) -> 'GeneratorConfig':
        return replace(self, **changes)
