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

from pathlib import Path
from typing import Union

from .emitters import EmittedUnit


class FileWriter:
    """Persists emitted units below an output directory, creating the
    namespace directories on the way. Failures surface as OSError."""

    def __init__(self, output_directory: Union[str, Path] = ".") -> None:
        self.output_directory = Path(output_directory)

    def target(self, unit: EmittedUnit) -> Path:
        return self.output_directory.joinpath(*unit.path.split("/"))

    def write(self, unit: EmittedUnit) -> Path:
        path = self.target(unit)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(unit.text)
        return path
