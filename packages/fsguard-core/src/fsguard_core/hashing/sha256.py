"""Reference SHA-256 implementation (FIPS 180-4).

Written step by step after the standard: padding, message schedule,
compression. ``fsguard_core.hashing.fast`` computes the same function with
fewer Python-level operations and must stay byte-identical to this module.
"""

from __future__ import annotations

DIGEST_SIZE = 32
BLOCK_SIZE = 64

_WORD_MASK = 0xFFFFFFFF
_LENGTH_MASK = 0xFFFFFFFFFFFFFFFF

# First 32 bits of the fractional parts of the square roots of the first 8 primes
INITIAL_STATE: tuple[int, ...] = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)

# First 32 bits of the fractional parts of the cube roots of the first 64 primes
ROUND_CONSTANTS: tuple[int, ...] = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5,
    0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3,
    0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC,
    0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7,
    0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13,
    0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3,
    0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5,
    0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208,
    0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)


def rotr(x: int, n: int) -> int:
    """Rotate a 32-bit word right by *n* bits."""
    return ((x >> n) | (x << (32 - n))) & _WORD_MASK


def pad_message(message: bytes) -> bytes:
    """Pad *message* to a whole number of 64-byte blocks.

    Appends a single ``1`` bit (``0x80``), zero bytes until the length in
    bits is congruent to 448 mod 512, then the original length in bits as a
    64-bit big-endian integer.
    """
    padded = bytearray(message)
    padded.append(0x80)
    while (len(padded) * 8) % 512 != 448:
        padded.append(0)
    bit_length = (len(message) * 8) & _LENGTH_MASK
    padded += bit_length.to_bytes(8, "big")
    return bytes(padded)


def message_schedule(block: bytes) -> list[int]:
    """Expand one 64-byte block into the 64-word message schedule."""
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"block must be {BLOCK_SIZE} bytes, got {len(block)}")

    w = [int.from_bytes(block[4 * i : 4 * i + 4], "big") for i in range(16)]
    for i in range(16, 64):
        s0 = rotr(w[i - 15], 7) ^ rotr(w[i - 15], 18) ^ (w[i - 15] >> 3)
        s1 = rotr(w[i - 2], 17) ^ rotr(w[i - 2], 19) ^ (w[i - 2] >> 10)
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & _WORD_MASK)
    return w


def compress(state: list[int], block: bytes) -> None:
    """Fold one 64-byte block into the 8-word running *state* in place."""
    w = message_schedule(block)
    a, b, c, d, e, f, g, h = state

    for i in range(64):
        big_s1 = rotr(e, 6) ^ rotr(e, 11) ^ rotr(e, 25)
        ch = (e & f) ^ (~e & g)
        temp1 = (h + big_s1 + ch + ROUND_CONSTANTS[i] + w[i]) & _WORD_MASK
        big_s0 = rotr(a, 2) ^ rotr(a, 13) ^ rotr(a, 22)
        maj = (a & b) ^ (a & c) ^ (b & c)
        temp2 = (big_s0 + maj) & _WORD_MASK

        h = g
        g = f
        f = e
        e = (d + temp1) & _WORD_MASK
        d = c
        c = b
        b = a
        a = (temp1 + temp2) & _WORD_MASK

    for i, value in enumerate((a, b, c, d, e, f, g, h)):
        state[i] = (state[i] + value) & _WORD_MASK


def sha256(data: bytes) -> bytes:
    """Return the 32-byte SHA-256 digest of *data*."""
    state = list(INITIAL_STATE)
    padded = pad_message(bytes(data))

    for offset in range(0, len(padded), BLOCK_SIZE):
        compress(state, padded[offset : offset + BLOCK_SIZE])

    return b"".join(word.to_bytes(4, "big") for word in state)
