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

from typing import Dict, List, Optional

from .tree import Node
from .namespace import safe_identifier


ANNOTATION_MARKERS: Dict[str, str] = {
    "key": "Key",
    "optional": "Optional",
    "id": "IDLEntity",
    "topic": "Topic",
    "nested": "Nested",
}


def tag(node: Optional[Node]) -> List[str]:
    """Metadata markers for the recognized annotations on ``node``, in
    order of appearance. Other annotations produce nothing."""
    if node is None:
        return []
    return [ANNOTATION_MARKERS[a] for a in node.annotations if a in ANNOTATION_MARKERS]


def is_nested_type(node: Optional[Node]) -> bool:
    return node is not None and node.has_annotation("nested")


def is_topic_type(node: Optional[Node]) -> bool:
    # A type that is neither marked topic nor nested is usable as a topic.
    if node is None:
        return False
    return node.has_annotation("topic") or not node.has_annotation("nested")


def field_markers(members, names=None) -> Dict[str, List[str]]:
    """Markers per member name, members without markers are left out.
    ``names`` overrides the member identifiers, index for index."""
    if names is None:
        names = [safe_identifier(m.name) if m.name else None for m in members]
    result = {}
    for name, member in zip(names, members):
        markers = tag(member)
        if markers and name:
            result[name] = markers
    return result
