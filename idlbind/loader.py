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

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple, Union as _Union

from .diagnostics import GenerationError
from .tree import (
    Node, Primitive, PrimitiveKind, StringType, WideStringType, Sequence, Member,
    Struct, Case, Union, Enum_, Bitmask, Typedef, Module
)


class LoaderError(GenerationError):
    pass


_primitives: Dict[str, Node] = {kind.value: Primitive(kind) for kind in PrimitiveKind}
_primitives.update({
    "bool": Primitive(PrimitiveKind.BOOL),
    "string": StringType(),
    "wstring": WideStringType(),
})


class TreeLoader:
    """Builds a type tree from its JSON document form:

    .. code-block:: json

        {"definitions": [
            {"kind": "module", "name": "shapes", "definitions": [
                {"kind": "struct", "name": "Point", "annotations": ["topic"],
                 "members": [{"name": "x", "type": "long", "annotations": ["key"]},
                             {"name": "tags", "type": {"sequence": "string"}},
                             {"name": "color", "type": {"ref": "Color"}}]}
            ]}
        ]}

    References are looked up like IDL scoped names: relative names are tried
    from the innermost enclosing module outwards, names starting with ``::``
    are absolute. They are resolved after the whole document has been read.
    """

    def __init__(self) -> None:
        self.entities: Dict[str, Node] = {}
        self._fixups: List[Tuple[List[str], str, Callable[[Node], None]]] = []

    def load(self, document: Dict[str, Any]) -> List[Node]:
        if not isinstance(document, dict) or not isinstance(document.get("definitions"), list):
            raise LoaderError("A tree document is an object with a 'definitions' list.")

        roots = [self._definition(d, []) for d in document["definitions"]]
        for scope, name, setter in self._fixups:
            setter(self._resolve(scope, name))
        self._fixups.clear()
        return roots

    def _resolve(self, scope: List[str], name: str) -> Node:
        if name.startswith("::"):
            candidates = [name[2:]]
        else:
            candidates = ["::".join(scope[:i] + [name]) for i in range(len(scope), -1, -1)]
        for candidate in candidates:
            if candidate in self.entities:
                return self.entities[candidate]
        raise LoaderError(f"Reference {name} in scope {'::'.join(scope) or '<global>'} cannot be resolved.")

    def _register(self, scope: List[str], node: Node) -> Node:
        if node.name:
            self.entities["::".join(scope + [node.name])] = node
        return node

    def _definition(self, data: Dict[str, Any], scope: List[str]) -> Node:
        if not isinstance(data, dict):
            raise LoaderError(f"Definition {data!r} is not an object.")
        kind = data.get("kind")
        name = data.get("name")
        annotations = data.get("annotations", [])

        if kind == "module":
            module = Module(name, annotations=annotations)
            inner = scope + [name or ""]
            for definition in data.get("definitions", []):
                module.add(self._definition(definition, inner))
            return module
        elif kind == "struct":
            members = [self._member(m, scope) for m in data.get("members", [])]
            return self._register(scope, Struct(name, members, annotations))
        elif kind == "union":
            union = Union(name, None, [self._case(c, scope) for c in data.get("cases", [])], annotations)
            self._type(data.get("discriminator", "long"), scope, lambda t: setattr(union, "discriminant_type", t))
            return self._register(scope, union)
        elif kind == "enum":
            return self._register(scope, Enum_(name, data.get("enumerators", []), annotations))
        elif kind == "bitmask":
            return self._register(scope, Bitmask(name, data.get("bit_values", data.get("bits", [])), annotations))
        elif kind == "typedef":
            typedef = Typedef(name, None, annotations)
            self._type(data.get("type"), scope, lambda t: setattr(typedef, "aliased_type", t))
            return self._register(scope, typedef)
        raise LoaderError(f"Unknown definition kind {kind!r} of {name!r}.")

    def _member(self, data: Dict[str, Any], scope: List[str]) -> Member:
        if not isinstance(data, dict):
            raise LoaderError(f"Member {data!r} is not an object.")
        member = Member(data.get("name"), None, data.get("annotations", []))
        self._type(data.get("type"), scope, lambda t: setattr(member, "type", t))
        return member

    def _case(self, data: Dict[str, Any], scope: List[str]) -> Case:
        labels = data.get("labels", [])
        if not isinstance(labels, list):
            labels = [labels]
        return Case(self._member(data, scope), labels, bool(data.get("default", False)))

    def _type(self, desc: _Union[str, Dict[str, Any], None], scope: List[str], setter: Callable[[Any], None]) -> None:
        if desc is None:
            # A missing type stays missing, generation reports it.
            setter(None)
        elif isinstance(desc, str):
            if desc not in _primitives:
                raise LoaderError(f"Unknown type {desc!r}, use {{'ref': ...}} for declared types.")
            setter(_primitives[desc])
        elif isinstance(desc, dict) and "sequence" in desc:
            sequence = Sequence(None)
            self._type(desc["sequence"], scope, lambda t: setattr(sequence, "element", t))
            setter(sequence)
        elif isinstance(desc, dict) and "ref" in desc:
            self._fixups.append((list(scope), desc["ref"], setter))
        else:
            raise LoaderError(f"Malformed type {desc!r}.")


def load_tree(document: Dict[str, Any]) -> List[Node]:
    return TreeLoader().load(document)


def load_file(path: _Union[str, Path]) -> List[Node]:
    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise LoaderError(f"{path} is not valid JSON: {e}") from e
    return load_tree(document)


def find_entity(roots: List[Node], name: str) -> Node:
    """Look up a definition by its scoped name, e.g. ``shapes::Point``."""
    parts = name.strip(":").split("::")
    nodes = roots
    for i, part in enumerate(parts):
        for node in nodes:
            if node.name == part:
                if i == len(parts) - 1:
                    return node
                if isinstance(node, Module):
                    nodes = node.definitions
                    break
        else:
            break
    raise LoaderError(f"No definition named {name}.")
