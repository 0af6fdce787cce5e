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

import struct
from typing import Any, Optional


class Buffer:
    """Growable little-endian byte buffer shared by the generated encode and
    decode methods. There is no alignment or encapsulation header, values are
    packed back to back."""

    _endian = "<"

    def __init__(self, _bytes: Optional[bytes] = None) -> None:
        if _bytes is not None:
            self._bytes: bytearray = bytearray(_bytes)
            self._limit: int = len(self._bytes)
        else:
            self._bytes = bytearray(64)
            self._limit = 0
        self._pos: int = 0
        self._size: int = len(self._bytes)

    def tell(self) -> int:
        return self._pos

    def remaining(self) -> int:
        return self._limit - self._pos

    def ensure_size(self, size: int) -> None:
        if self._pos + size > self._size:
            old_bytes = self._bytes
            old_size = self._size
            while self._pos + size > self._size:
                self._size = max(self._size * 2, 1)
            self._bytes = bytearray(self._size)
            self._bytes[0:old_size] = old_bytes

    def _check_available(self, size: int) -> None:
        if self._pos + size > self._limit:
            raise ValueError(
                f"Buffer underrun: need {size} bytes at offset {self._pos}, "
                f"only {max(self._limit - self._pos, 0)} available."
            )

    def write(self, pack: str, size: int, value: Any) -> 'Buffer':
        self.ensure_size(size)
        struct.pack_into(self._endian + pack, self._bytes, self._pos, value)
        self._pos += size
        self._limit = max(self._limit, self._pos)
        return self

    def write_bytes(self, _bytes: bytes) -> 'Buffer':
        length = len(_bytes)
        self.ensure_size(length)
        self._bytes[self._pos:self._pos + length] = _bytes
        self._pos += length
        self._limit = max(self._limit, self._pos)
        return self

    def read_bytes(self, length: int) -> bytes:
        self._check_available(length)
        b = bytes(self._bytes[self._pos:self._pos + length])
        self._pos += length
        return b

    def read(self, pack: str, size: int) -> Any:
        self._check_available(size)
        v = struct.unpack_from(self._endian + pack, buffer=self._bytes, offset=self._pos)
        self._pos += size
        return v[0]

    def asbytes(self) -> bytes:
        return bytes(self._bytes[0:self._pos])
