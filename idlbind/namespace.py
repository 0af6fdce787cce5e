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

import keyword
from typing import List, Optional

from .tree import Node, Module, Struct, Union, Enum_, Bitmask, Typedef


DEFAULT_NAMESPACE = "generated"

_fallback_names = {
    Struct: "UnnamedStruct",
    Union: "UnnamedUnion",
    Enum_: "UnnamedEnum",
    Bitmask: "UnnamedBitmask",
    Typedef: "UnnamedTypedef",
    Module: "unnamed",
}


def safe_identifier(name: str) -> str:
    """Python keywords cannot be used as module, class or field names,
    they get a trailing underscore."""
    if keyword.iskeyword(name) or name in ("None", "True", "False"):
        return name + "_"
    return name


def entity_name(node: Node) -> str:
    """The node's own identifier, or a fixed fallback for anonymous nodes."""
    if node.name:
        return safe_identifier(node.name)
    return _fallback_names.get(type(node), "Unnamed")


def scope_chain(node: Node) -> List[str]:
    """Identifiers of the enclosing modules, outermost first. Anonymous
    modules add no scope."""
    chain = []
    parent = node.parent
    while parent is not None:
        if isinstance(parent, Module) and parent.name:
            chain.append(entity_name(parent))
        parent = parent.parent
    chain.reverse()
    return chain


def resolve_namespace(node: Node, prefix: Optional[str] = None) -> str:
    """Dotted namespace of ``node``. Top-level nodes live in the default
    namespace; ``prefix`` is prepended in both cases."""
    chain = scope_chain(node)
    namespace = ".".join(chain) if chain else DEFAULT_NAMESPACE
    if prefix:
        return f"{prefix}.{namespace}"
    return namespace


def qualified_module(node: Node, prefix: Optional[str] = None) -> str:
    """Import path of the unit generated for ``node``."""
    return f"{resolve_namespace(node, prefix)}.{entity_name(node)}"


def output_path(node: Node, prefix: Optional[str] = None) -> str:
    """Relative path of the unit generated for ``node``, always with
    forward slashes."""
    return "/".join(resolve_namespace(node, prefix).split(".") + [entity_name(node) + ".py"])


def scoped_name(node: Node) -> str:
    """IDL spelling of the node's fully scoped name, e.g. ``shapes::Point``."""
    return "::".join(scope_chain(node) + [entity_name(node)])
