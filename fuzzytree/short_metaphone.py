"""
Double Metaphone keys packed into 16-bit integers.

Philips suggested representing each four-symbol key as four nibbles of an
unsigned short, which makes keys cheap to store, compare and use as
dictionary keys. The nibble table below covers every symbol the encoder
can emit; a symbol outside it means the encoder is broken.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional

from .double_metaphone import KEY_LENGTH, DoubleMetaphone
from .exceptions import InvariantViolationError

# Nibble values of single key symbols
METAPHONE_NULL = 0x00
METAPHONE_A = 0x01
METAPHONE_F = 0x02
METAPHONE_H = 0x03
METAPHONE_J = 0x04
METAPHONE_K = 0x05
METAPHONE_L = 0x06
METAPHONE_M = 0x07
METAPHONE_N = 0x08
METAPHONE_P = 0x09
METAPHONE_S = 0x0A
METAPHONE_T = 0x0B
METAPHONE_R = 0x0C
METAPHONE_X = 0x0D
METAPHONE_0 = 0x0E
METAPHONE_SPACE = 0x0F

# Two-symbol phonemes emitted by a single rule
METAPHONE_FX = (METAPHONE_F << 4) | METAPHONE_X
METAPHONE_KL = (METAPHONE_K << 4) | METAPHONE_L
METAPHONE_KN = (METAPHONE_K << 4) | METAPHONE_N
METAPHONE_KS = (METAPHONE_K << 4) | METAPHONE_S
METAPHONE_SK = (METAPHONE_S << 4) | METAPHONE_K
METAPHONE_TK = (METAPHONE_T << 4) | METAPHONE_K
METAPHONE_TS = (METAPHONE_T << 4) | METAPHONE_S

# Sentinel for "this word has no alternate key"
METAPHONE_INVALID_KEY = 0xFFFF

SYMBOL_NIBBLES: Mapping[str, int] = MappingProxyType(
    {
        "A": METAPHONE_A,
        "F": METAPHONE_F,
        "H": METAPHONE_H,
        "J": METAPHONE_J,
        "K": METAPHONE_K,
        "L": METAPHONE_L,
        "M": METAPHONE_M,
        "N": METAPHONE_N,
        "P": METAPHONE_P,
        "S": METAPHONE_S,
        "T": METAPHONE_T,
        "R": METAPHONE_R,
        "X": METAPHONE_X,
        "0": METAPHONE_0,
        " ": METAPHONE_SPACE,
    }
)


class PackedKey(NamedTuple):
    """Primary and alternate keys as 16-bit integers.

    ``alternate`` is :data:`METAPHONE_INVALID_KEY` when the word has no
    alternate pronunciation.
    """

    primary: int
    alternate: int = METAPHONE_INVALID_KEY

    @property
    def has_alternate(self) -> bool:
        return self.alternate != METAPHONE_INVALID_KEY


def pack_key(key: str) -> int:
    """Pack a metaphone key into a 16-bit integer, most significant nibble first.

    Keys shorter than four symbols leave the trailing nibbles at zero, so
    ``"SM0"`` packs to ``0xA7E0``.

    Raises
    ------
    InvariantViolationError
        If ``key`` is longer than four symbols or contains a symbol the
        encoder never emits.
    """
    if len(key) > KEY_LENGTH:
        raise InvariantViolationError(
            f"Metaphone key {key!r} is longer than {KEY_LENGTH} symbols"
        )

    result = METAPHONE_NULL
    for position in range(KEY_LENGTH):
        result <<= 4
        if position < len(key):
            nibble = SYMBOL_NIBBLES.get(key[position])
            if nibble is None:
                logging.error(f"No nibble mapping for metaphone symbol {key[position]!r}")
                raise InvariantViolationError(
                    f"Metaphone symbol {key[position]!r} has no nibble mapping"
                )
            result |= nibble
    return result


class ShortDoubleMetaphone(DoubleMetaphone):
    """:class:`DoubleMetaphone` that also exposes its keys as 16-bit integers.

    The packed keys are recomputed every time :meth:`compute_keys` runs so
    they always reflect the current word.
    """

    def compute_keys(self, word: Optional[str]) -> None:
        super().compute_keys(word)
        self._primary_short_key = pack_key(self.primary_key)
        alternate = self.alternate_key
        self._alternate_short_key = (
            pack_key(alternate) if alternate is not None else METAPHONE_INVALID_KEY
        )

    @property
    def primary_short_key(self) -> int:
        return self._primary_short_key

    @property
    def alternate_short_key(self) -> int:
        """Packed alternate key or :data:`METAPHONE_INVALID_KEY`."""
        return self._alternate_short_key

    @property
    def packed_keys(self) -> PackedKey:
        return PackedKey(self._primary_short_key, self._alternate_short_key)


def encode_packed(word: Optional[str]) -> PackedKey:
    """Return the packed Double Metaphone keys of ``word``."""
    return ShortDoubleMetaphone(word).packed_keys
