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

from ._type_helper import Annotated


char = Annotated[str, "char"]
int8 = Annotated[int, "int8"]
int16 = Annotated[int, "int16"]
int32 = Annotated[int, "int32"]
int64 = Annotated[int, "int64"]
uint8 = Annotated[int, "uint8"]
uint16 = Annotated[int, "uint16"]
uint32 = Annotated[int, "uint32"]
uint64 = Annotated[int, "uint64"]
float32 = Annotated[float, "float32"]
float64 = Annotated[float, "float64"]


# Wire width in bytes and struct format code of every scalar alias. Signed
# and unsigned aliases of one width share their size.
_type_code_size_mapping = {
    bool: ('?', 1),
    char: ('B', 1),
    int8: ('b', 1),
    int16: ('h', 2),
    int32: ('i', 4),
    int64: ('q', 8),
    uint8: ('B', 1),
    uint16: ('H', 2),
    uint32: ('I', 4),
    uint64: ('Q', 8),
    float32: ('f', 4),
    float64: ('d', 8),
}


__all__ = [
    "char", "int8", "int16", "int32", "int64", "uint8", "uint16", "uint32",
    "uint64", "float32", "float64"
]
