"""Optimized SHA-256 path.

Same function as :func:`fsguard_core.hashing.sha256.sha256`, with the word
unpacking done by ``struct``, padding computed arithmetically and the
rotations inlined into the round loop. Outputs must match the reference
implementation byte for byte.
"""

from __future__ import annotations

import struct

from fsguard_core.hashing.sha256 import BLOCK_SIZE, INITIAL_STATE, ROUND_CONSTANTS

_M = 0xFFFFFFFF
_unpack_block = struct.Struct(">16I").unpack_from
_pack_state = struct.Struct(">8I").pack


def _pad(message: bytes) -> bytes:
    length = len(message)
    zeros = (55 - length) % BLOCK_SIZE
    bit_length = (length * 8) & 0xFFFFFFFFFFFFFFFF
    return b"".join((message, b"\x80", bytes(zeros), bit_length.to_bytes(8, "big")))


def sha256_fast(data: bytes) -> bytes:
    """Return the 32-byte SHA-256 digest of *data*."""
    padded = _pad(bytes(data))
    k = ROUND_CONSTANTS
    h0, h1, h2, h3, h4, h5, h6, h7 = INITIAL_STATE

    for offset in range(0, len(padded), BLOCK_SIZE):
        w = list(_unpack_block(padded, offset))
        for i in range(16, 64):
            x = w[i - 15]
            y = w[i - 2]
            s0 = ((x >> 7 | x << 25) ^ (x >> 18 | x << 14) ^ (x >> 3)) & _M
            s1 = ((y >> 17 | y << 15) ^ (y >> 19 | y << 13) ^ (y >> 10)) & _M
            w.append((w[i - 16] + s0 + w[i - 7] + s1) & _M)

        a, b, c, d, e, f, g, h = h0, h1, h2, h3, h4, h5, h6, h7
        for ki, wi in zip(k, w):
            t1 = (
                h
                + (((e >> 6 | e << 26) ^ (e >> 11 | e << 21) ^ (e >> 25 | e << 7)) & _M)
                + ((e & f) ^ (~e & g))
                + ki
                + wi
            )
            t2 = (((a >> 2 | a << 30) ^ (a >> 13 | a << 19) ^ (a >> 22 | a << 10)) & _M) + (
                (a & b) ^ (a & c) ^ (b & c)
            )
            h = g
            g = f
            f = e
            e = (d + t1) & _M
            d = c
            c = b
            b = a
            a = (t1 + t2) & _M

        h0 = (h0 + a) & _M
        h1 = (h1 + b) & _M
        h2 = (h2 + c) & _M
        h3 = (h3 + d) & _M
        h4 = (h4 + e) & _M
        h5 = (h5 + f) & _M
        h6 = (h6 + g) & _M
        h7 = (h7 + h) & _M

    return _pack_state(h0, h1, h2, h3, h4, h5, h6, h7)
