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

from .config import GeneratorConfig
from .diagnostics import Diagnostics, GenerationError, GenerationResult
from .emitters import EmittedUnit, emit_entity
from .generator import Generator, generate
from .loader import LoaderError, load_file, load_tree
from .namespace import resolve_namespace
from .type_mapper import TypeMapper
from .annotations import tag, is_topic_type, is_nested_type


__version__ = "0.1.0"

__all__ = [
    "GeneratorConfig", "Diagnostics", "GenerationError", "GenerationResult", "EmittedUnit",
    "emit_entity", "Generator", "generate", "LoaderError", "load_file", "load_tree",
    "resolve_namespace", "TypeMapper", "tag", "is_topic_type", "is_nested_type"
]
