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

from contextlib import contextmanager
from textwrap import indent
from typing import Any, Iterator, List


class OutputAssembler:
    """Append-only text sink for one emitted unit. Lines are indented with
    the current level, four spaces per level."""

    def __init__(self, level: int = 0) -> None:
        self._parts: List[str] = []
        self.level: int = level

    @property
    def _indent(self) -> str:
        return "    " * self.level

    def append(self, text: str = "") -> 'OutputAssembler':
        """Append one line at the current indentation. Embedded newlines
        are indented as well, blank lines stay empty."""
        if text:
            self._parts.append(indent(text, self._indent) + "\n")
        else:
            self._parts.append("\n")
        return self

    def appendf(self, fmt: str, *args: Any, **kwargs: Any) -> 'OutputAssembler':
        return self.append(fmt.format(*args, **kwargs))

    def extend(self, other: 'OutputAssembler') -> 'OutputAssembler':
        """Append everything ``other`` holds, shifted to this level."""
        text = other.text()
        if text:
            self._parts.append(indent(text, self._indent))
        return self

    def push(self) -> None:
        self.level += 1

    def pop(self) -> None:
        if self.level == 0:
            raise ValueError("Cannot dedent below level zero.")
        self.level -= 1

    @contextmanager
    def indented(self) -> Iterator['OutputAssembler']:
        self.push()
        try:
            yield self
        finally:
            self.pop()

    def is_empty(self) -> bool:
        return not self._parts

    def text(self) -> str:
        return "".join(self._parts)

    def __str__(self) -> str:
        return self.text()
