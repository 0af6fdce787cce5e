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
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple


logger = logging.getLogger(__name__)


class GenerationError(Exception):
    pass


@dataclass
class Diagnostics:
    """Warning and error accounting shared by the emitters of one run.
    Recoverable conditions are recorded here instead of raised.

    While a subject is set with :meth:`concerning`, only the first warning
    about it is counted, later ones are logged at debug level.
    """
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    _subject: Optional[Tuple[str, ...]] = field(default=None, init=False, repr=False, compare=False)
    _reported: Set[Tuple[str, ...]] = field(default_factory=set, init=False, repr=False, compare=False)

    @contextmanager
    def concerning(self, *subject: str) -> Iterator[None]:
        previous, self._subject = self._subject, subject
        try:
            yield
        finally:
            self._subject = previous

    def warn(self, message: str) -> None:
        if self._subject is not None:
            if self._subject in self._reported:
                logger.debug(message)
                return
            self._reported.add(self._subject)
        logger.warning(message)
        self.warnings.append(message)

    def error(self, message: str) -> None:
        logger.error(message)
        self.errors.append(message)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    @property
    def error_count(self) -> int:
        return len(self.errors)


@dataclass
class GenerationResult:
    error_count: int = 0
    warning_count: int = 0
    counts: Dict[str, int] = field(default_factory=lambda: {
        "module": 0, "struct": 0, "union": 0, "enum": 0, "bitmask": 0, "typedef": 0
    })
    paths: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.error_count == 0

    @property
    def entity_count(self) -> int:
        return sum(v for k, v in self.counts.items() if k != "module")

    def summary(self) -> str:
        status = "completed successfully" if self.success else f"completed with {self.error_count} errors"
        return (
            f"Generation {status}: {self.counts['struct']} structs, {self.counts['union']} unions, "
            f"{self.counts['enum']} enums, {self.counts['bitmask']} bitmasks, "
            f"{self.counts['typedef']} typedefs in {self.counts['module']} modules"
        )
