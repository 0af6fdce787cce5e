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

import logging
from typing import Iterable, Iterator, List, Optional, Union

from .config import GeneratorConfig
from .diagnostics import Diagnostics, GenerationResult
from .emitters import EmittedUnit, emitter_for
from .namespace import scoped_name
from .tree import Module, Node, is_entity
from .writer import FileWriter


logger = logging.getLogger(__name__)

Roots = Union[Node, Iterable[Node]]


def _roots(roots: Roots) -> List[Node]:
    if isinstance(roots, Node):
        return [roots]
    return list(roots)


class Generator:
    """Depth-first driver of one generation run.

    Every entity below the roots is emitted and handed to the writer as soon
    as it is complete. A failure to write one unit is counted and the run
    carries on with the remaining entities, nothing is rolled back.
    """

    def __init__(self, config: Optional[GeneratorConfig] = None, writer=None) -> None:
        self.config = config or GeneratorConfig()
        self.writer = writer if writer is not None else FileWriter(self.config.output_directory)
        self.diagnostics = Diagnostics()
        self.result = GenerationResult()

    def units(self, roots: Roots) -> Iterator[EmittedUnit]:
        """Emit the units of every entity below ``roots`` without writing."""
        for node in _roots(roots):
            yield from self._visit(node)

    def _visit(self, node: Node) -> Iterator[EmittedUnit]:
        if isinstance(node, Module):
            logger.info(f"Processing module: {scoped_name(node)}")
            self.result.counts["module"] += 1
            for definition in node.definitions:
                yield from self._visit(definition)
        elif is_entity(node):
            emitter = emitter_for(node, self.config, self.diagnostics)
            logger.info(f"Found {emitter.kind}: {scoped_name(node)}")
            self.result.counts[emitter.kind] += 1
            yield emitter.emit()
        else:
            self.diagnostics.warn(f"Skipping {node!r}, it is neither a module nor an entity.")

    def generate(self, roots: Roots) -> GenerationResult:
        for unit in self.units(roots):
            try:
                path = self.writer.write(unit)
            except OSError as e:
                self.diagnostics.error(f"Failed to write {unit.path}: {e}")
                continue
            logger.info(f"Created: {path}")
            self.result.paths.append(unit.path)

        self.result.error_count = self.diagnostics.error_count
        self.result.warning_count = self.diagnostics.warning_count
        if self.result.success:
            logger.info(self.result.summary())
        else:
            logger.error(self.result.summary())
        return self.result


def generate(roots: Roots, config: Optional[GeneratorConfig] = None, writer=None) -> GenerationResult:
    """Generate and write the units of every entity below ``roots``."""
    return Generator(config, writer).generate(roots)
