"""
Double Metaphone phonetic encoding (Lawrence Philips, 2000).

Each word is reduced to a primary key and, when the spelling admits a
second plausible pronunciation, an alternate key. Keys hold at most four
symbols from the alphabet ``A F H J K L M N P R S T X 0`` where ``A``
stands for an initial vowel, ``X`` for the "sh" sound and ``0`` for "th".

Usage:
    from fuzzytree.double_metaphone import encode

    encode("Smith")     # PhoneticKey(primary='SM0', alternate='XMT')
    encode("Thompson")  # alternate is None
"""

from __future__ import annotations

from typing import Callable, Dict, NamedTuple, Optional

from .config import METAPHONE

KEY_LENGTH: int = METAPHONE["key_length"]
_PADDING: str = METAPHONE["padding"]
_VOWELS = frozenset(METAPHONE["vowels"])
_SLAVO_GERMANIC_MARKERS = METAPHONE["slavo_germanic_markers"]


class PhoneticKey(NamedTuple):
    """Primary and optional alternate Double Metaphone keys of a word."""

    primary: str
    alternate: Optional[str] = None


def _upper(word: str) -> str:
    # str.upper() may expand a character ("ß" -> "SS"); keep positions stable
    return "".join(
        upper if len(upper) == 1 else char
        for char, upper in ((c, c.upper()) for c in word)
    )


class DoubleMetaphone:
    """Compute Double Metaphone keys for a word.

    The instance can be reused: :meth:`compute_keys` resets the state and
    encodes a new word.

    Parameters
    ----------
    word: str, optional
        Word to encode. ``None`` and ``""`` both give empty keys.
    """

    def __init__(self, word: Optional[str] = "") -> None:
        self._handlers: Dict[str, Callable[[int], int]] = {
            "B": self._encode_b,
            "Ç": self._encode_c_cedilla,
            "C": self._encode_c,
            "D": self._encode_d,
            "F": self._encode_f,
            "G": self._encode_g,
            "H": self._encode_h,
            "J": self._encode_j,
            "K": self._encode_k,
            "L": self._encode_l,
            "M": self._encode_m,
            "N": self._encode_n,
            "Ñ": self._encode_n_tilde,
            "P": self._encode_p,
            "Q": self._encode_q,
            "R": self._encode_r,
            "S": self._encode_s,
            "T": self._encode_t,
            "V": self._encode_v,
            "W": self._encode_w,
            "X": self._encode_x,
            "Z": self._encode_z,
        }
        for vowel in _VOWELS:
            self._handlers[vowel] = self._encode_vowel
        self.compute_keys(word)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def word(self) -> str:
        """The word as originally passed in."""
        return self._original_word

    @property
    def primary_key(self) -> str:
        return self._primary

    @property
    def alternate_key(self) -> Optional[str]:
        """Alternate key, or ``None`` if the word has a single pronunciation."""
        return self._alternate if self._has_alternate else None

    @property
    def keys(self) -> PhoneticKey:
        return PhoneticKey(self.primary_key, self.alternate_key)

    def compute_keys(self, word: Optional[str]) -> None:
        """Encode ``word``, replacing any previously computed keys."""
        word = word or ""
        self._original_word = word
        self._primary = ""
        self._alternate = ""
        self._has_alternate = False
        self._length = len(word)
        self._last = self._length - 1
        self._word = _upper(word + _PADDING)
        self._slavo_germanic = any(
            marker in self._word for marker in _SLAVO_GERMANIC_MARKERS
        )

        self._build_keys()

        self._primary = self._primary[:KEY_LENGTH]
        self._alternate = self._alternate[:KEY_LENGTH]

    # ------------------------------------------------------------------
    # Scan helpers
    # ------------------------------------------------------------------
    def _add(self, primary: str, alternate: Optional[str] = None) -> None:
        """Append phonemes to the keys.

        Without ``alternate`` the primary phoneme goes to both keys. A
        non-empty ``alternate`` flags the word as having an alternate
        pronunciation; ``" "`` flags it without appending anything.
        """
        self._primary += primary
        if alternate is None:
            self._alternate += primary
        elif alternate:
            self._has_alternate = True
            if alternate[0] != " ":
                self._alternate += alternate
        elif primary and primary[0] != " ":
            self._alternate += primary

    def _at(self, start: int, length: int, *candidates: str) -> bool:
        """Return True if the ``length`` characters at ``start`` are one of ``candidates``."""
        if start < 0:
            return False
        return self._word[start:start + length] in candidates

    def _char(self, pos: int) -> str:
        if 0 <= pos < len(self._word):
            return self._word[pos]
        return ""

    def _is_vowel(self, pos: int) -> bool:
        return 0 <= pos < self._length and self._word[pos] in _VOWELS

    def _germanic_prefix(self) -> bool:
        return self._at(0, 4, "VAN ", "VON ") or self._at(0, 3, "SCH")

    def _skip_double(self, current: int, letter: str) -> int:
        return current + 2 if self._char(current + 1) == letter else current + 1

    def _build_keys(self) -> None:
        if self._length < 1:
            return

        current = 0
        # Silent first letter: GNOME, KNIGHT, PNEUMONIA, WRITE, PSALM
        if self._at(0, 2, "GN", "KN", "PN", "WR", "PS"):
            current += 1

        # Initial X is pronounced Z, which maps to S: XAVIER
        if self._word[0] == "X":
            self._add("S")
            current += 1

        while len(self._primary) < KEY_LENGTH or len(self._alternate) < KEY_LENGTH:
            if current >= self._length:
                break
            handler = self._handlers.get(self._word[current])
            if handler is None:
                current += 1
            else:
                current = handler(current)

    # ------------------------------------------------------------------
    # Letter rules. Each returns the new cursor position.
    # ------------------------------------------------------------------
    def _encode_vowel(self, current: int) -> int:
        if current == 0:
            self._add("A")
        return current + 1

    def _encode_b(self, current: int) -> int:
        # "-mb" as in "dumb" is handled under M
        self._add("P")
        return self._skip_double(current, "B")

    def _encode_c_cedilla(self, current: int) -> int:
        self._add("S")
        return current + 1

    def _encode_c(self, current: int) -> int:
        # Germanic: BACHER, MACHER
        if (
            current > 1
            and not self._is_vowel(current - 2)
            and self._at(current - 1, 3, "ACH")
            and self._char(current + 2) != "I"
            and (
                self._char(current + 2) != "E"
                or self._at(current - 2, 6, "BACHER", "MACHER")
            )
        ):
            self._add("K")
            return current + 2

        if current == 0 and self._at(current, 6, "CAESAR"):
            self._add("S")
            return current + 2

        # Italian: CHIANTI
        if self._at(current, 4, "CHIA"):
            self._add("K")
            return current + 2

        if self._at(current, 2, "CH"):
            return self._encode_ch(current)

        # CZERNY
        if self._at(current, 2, "CZ") and not self._at(current - 2, 4, "WICZ"):
            self._add("S", "X")
            return current + 2

        # FOCACCIA
        if self._at(current + 1, 3, "CIA"):
            self._add("X")
            return current + 3

        # Double C, but not McClellan
        if self._at(current, 2, "CC") and not (current == 1 and self._word[0] == "M"):
            # BELLOCCHIO but not BACCHUS
            if self._at(current + 2, 1, "I", "E", "H") and not self._at(current + 2, 2, "HU"):
                # ACCIDENT, ACCEDE, SUCCEED
                if (current == 1 and self._char(current - 1) == "A") or self._at(
                    current - 1, 5, "UCCEE", "UCCES"
                ):
                    self._add("KS")
                else:
                    # BACCI, BERTUCCI
                    self._add("X")
                return current + 3
            # Pierce's rule
            self._add("K")
            return current + 2

        if self._at(current, 2, "CK", "CG", "CQ"):
            self._add("K")
            return current + 2

        if self._at(current, 2, "CI", "CE", "CY"):
            # Italian vs. English
            if self._at(current, 3, "CIO", "CIE", "CIA"):
                self._add("S", "X")
            else:
                self._add("S")
            return current + 2

        self._add("K")

        # MAC CAFFREY, MAC GREGOR
        if self._at(current + 1, 2, " C", " Q", " G"):
            return current + 3
        if self._at(current + 1, 1, "C", "K", "Q") and not self._at(current + 1, 2, "CE", "CI"):
            return current + 2
        return current + 1

    def _encode_ch(self, current: int) -> int:
        # MICHAEL
        if current > 0 and self._at(current, 4, "CHAE"):
            self._add("K", "X")
            return current + 2

        # Greek roots: CHEMISTRY, CHORUS
        if (
            current == 0
            and (
                self._at(current + 1, 5, "HARAC", "HARIS")
                or self._at(current + 1, 3, "HOR", "HYM", "HIA", "HEM")
            )
            and not self._at(0, 5, "CHORE")
        ):
            self._add("K")
            return current + 2

        if (
            self._germanic_prefix()
            # ORCHESTRA, ARCHITECT but not ARCH
            or self._at(current - 2, 6, "ORCHES", "ARCHIT", "ORCHID")
            or self._at(current + 2, 1, "T", "S")
            or (
                (self._at(current - 1, 1, "A", "O", "U", "E") or current == 0)
                # WACHTLER, WECHSLER but not TICHNER
                and self._at(current + 2, 1, "L", "R", "N", "M", "B", "H", "F", "V", "W", " ")
            )
        ):
            self._add("K")
        elif current > 0:
            if self._at(0, 2, "MC"):
                # MCHUGH
                self._add("K")
            else:
                self._add("X", "K")
        else:
            self._add("X")
        return current + 2

    def _encode_d(self, current: int) -> int:
        if self._at(current, 2, "DG"):
            # EDGE
            if self._at(current + 2, 1, "I", "E", "Y"):
                self._add("J")
                return current + 3
            # EDGAR
            self._add("TK")
            return current + 2

        if self._at(current, 2, "DT", "DD"):
            self._add("T")
            return current + 2

        self._add("T")
        return current + 1

    def _encode_f(self, current: int) -> int:
        self._add("F")
        return self._skip_double(current, "F")

    def _encode_g(self, current: int) -> int:
        following = self._char(current + 1)

        if following == "H":
            return self._encode_gh(current)

        if following == "N":
            if current == 1 and self._is_vowel(0) and not self._slavo_germanic:
                self._add("KN", "N")
            elif (
                not self._at(current + 2, 2, "EY")
                and following != "Y"
                and not self._slavo_germanic
            ):
                # Not e.g. CAGNEY
                self._add("N", "KN")
            else:
                self._add("KN")
            return current + 2

        # TAGLIARO
        if self._at(current + 1, 2, "LI") and not self._slavo_germanic:
            self._add("KL", "L")
            return current + 2

        # -GES-, -GEP-, -GEL-, -GIE- at the beginning
        if current == 0 and (
            following == "Y"
            or self._at(
                current + 1, 2, "ES", "EP", "EB", "EL", "EY", "IB", "IL", "IN", "IE", "EI", "ER"
            )
        ):
            self._add("K", "J")
            return current + 2

        # -GER-, -GY-
        if (
            (self._at(current + 1, 2, "ER") or following == "Y")
            and not self._at(0, 6, "DANGER", "RANGER", "MANGER")
            and not self._at(current - 1, 1, "E", "I")
            and not self._at(current - 1, 3, "RGY", "OGY")
        ):
            self._add("K", "J")
            return current + 2

        # Italian: BIAGGI
        if self._at(current + 1, 1, "E", "I", "Y") or self._at(current - 1, 4, "AGGI", "OGGI"):
            # Germanic
            if self._germanic_prefix() or self._at(current + 1, 2, "ET"):
                self._add("K")
            elif self._at(current + 1, 4, "IER "):
                self._add("J")
            else:
                self._add("J", "K")
            return current + 2

        self._add("K")
        return self._skip_double(current, "G")

    def _encode_gh(self, current: int) -> int:
        if current > 0 and not self._is_vowel(current - 1):
            self._add("K")
            return current + 2

        # GHISLANE, GHIRADELLI
        if current == 0:
            self._add("J" if self._char(current + 2) == "I" else "K")
            return current + 2

        # Parker's rule: HUGH, BOUGH, BROUGHTON
        if (
            (current > 1 and self._at(current - 2, 1, "B", "H", "D"))
            or (current > 2 and self._at(current - 3, 1, "B", "H", "D"))
            or (current > 3 and self._at(current - 4, 1, "B", "H"))
        ):
            return current + 2

        # LAUGH, MCLAUGHLIN, COUGH, GOUGH, ROUGH, TOUGH
        if (
            current > 2
            and self._char(current - 1) == "U"
            and self._at(current - 3, 1, "C", "G", "L", "R", "T")
        ):
            self._add("F")
        elif current > 0 and self._char(current - 1) != "I":
            self._add("K")
        return current + 2

    def _encode_h(self, current: int) -> int:
        # Only keep H between vowels or at the start before a vowel
        if (current == 0 or self._is_vowel(current - 1)) and self._is_vowel(current + 1):
            self._add("H")
            return current + 2
        return current + 1

    def _encode_j(self, current: int) -> int:
        # Spanish: JOSE, SAN JACINTO
        if self._at(current, 4, "JOSE") or self._at(0, 4, "SAN "):
            if (current == 0 and self._char(current + 4) == " ") or self._at(0, 4, "SAN "):
                self._add("H")
            else:
                self._add("J", "H")
            return current + 1

        if current == 0 and not self._at(current, 4, "JOSE"):
            # Yankelovich / Jankelowicz
            self._add("J", "A")
        elif (
            self._is_vowel(current - 1)
            and not self._slavo_germanic
            and self._char(current + 1) in ("A", "O")
        ):
            # Spanish pronunciation of e.g. BAJADOR
            self._add("J", "H")
        elif current == self._last:
            self._add("J", " ")
        elif not self._at(current + 1, 1, "L", "T", "K", "S", "N", "M", "B", "Z") and not self._at(
            current - 1, 1, "S", "K", "L"
        ):
            self._add("J")

        return self._skip_double(current, "J")

    def _encode_k(self, current: int) -> int:
        self._add("K")
        return self._skip_double(current, "K")

    def _encode_l(self, current: int) -> int:
        if self._char(current + 1) == "L":
            # Spanish: CABRILLO, GALLEGOS
            if (
                current == self._length - 3 and self._at(current - 1, 4, "ILLO", "ILLA", "ALLE")
            ) or (
                (self._at(self._last - 1, 2, "AS", "OS") or self._at(self._last, 1, "A", "O"))
                and self._at(current - 1, 4, "ALLE")
            ):
                self._add("L", " ")
                return current + 2
            self._add("L")
            return current + 2
        self._add("L")
        return current + 1

    def _encode_m(self, current: int) -> int:
        self._add("M")
        # DUMB, THUMB
        if (
            self._at(current - 1, 3, "UMB")
            and (current + 1 == self._last or self._at(current + 2, 2, "ER"))
        ) or self._char(current + 1) == "M":
            return current + 2
        return current + 1

    def _encode_n(self, current: int) -> int:
        self._add("N")
        return self._skip_double(current, "N")

    def _encode_n_tilde(self, current: int) -> int:
        self._add("N")
        return current + 1

    def _encode_p(self, current: int) -> int:
        if self._char(current + 1) == "H":
            self._add("F")
            return current + 2

        # CAMPBELL, RASPBERRY
        self._add("P")
        if self._at(current + 1, 1, "P", "B"):
            return current + 2
        return current + 1

    def _encode_q(self, current: int) -> int:
        self._add("K")
        return self._skip_double(current, "Q")

    def _encode_r(self, current: int) -> int:
        # French: ROGIER, but not HOCHMEIER
        if (
            current == self._last
            and not self._slavo_germanic
            and self._at(current - 2, 2, "IE")
            and not self._at(current - 4, 2, "ME", "MA")
        ):
            self._add("", "R")
        else:
            self._add("R")
        return self._skip_double(current, "R")

    def _encode_s(self, current: int) -> int:
        # Silent in ISLAND, ISLE, CARLISLE, CARLYSLE
        if self._at(current - 1, 3, "ISL", "YSL"):
            return current + 1

        # SUGAR
        if current == 0 and self._at(current, 5, "SUGAR"):
            self._add("X", "S")
            return current + 1

        if self._at(current, 2, "SH"):
            # Germanic: HOLSHEIM
            if self._at(current + 1, 4, "HEIM", "HOEK", "HOLM", "HOLZ"):
                self._add("S")
            else:
                self._add("X")
            return current + 2

        # Italian and Armenian: SIO, SIA, SIAN
        if self._at(current, 3, "SIO", "SIA") or self._at(current, 4, "SIAN"):
            if not self._slavo_germanic:
                self._add("S", "X")
            else:
                self._add("S")
            return current + 3

        # German and anglicisations: SMITH vs SCHMIDT, SNIDER vs SCHNEIDER.
        # Also -SZ- in Slavic languages.
        if (current == 0 and self._at(current + 1, 1, "M", "N", "L", "W")) or self._at(
            current + 1, 1, "Z"
        ):
            self._add("S", "X")
            if self._at(current + 1, 1, "Z"):
                return current + 2
            return current + 1

        if self._at(current, 2, "SC"):
            return self._encode_sc(current)

        # French: RESNAIS, ARTOIS
        if current == self._last and self._at(current - 2, 2, "AI", "OI"):
            self._add("", "S")
        else:
            self._add("S")

        if self._at(current + 1, 1, "S", "Z"):
            return current + 2
        return current + 1

    def _encode_sc(self, current: int) -> int:
        # Schlesinger's rule
        if self._char(current + 2) == "H":
            # Dutch origin: SCHENKER
            if self._at(current + 3, 2, "OO", "ER", "EN", "UY", "ED", "EM"):
                # SCHERMERHORN, SCHENKER
                if self._at(current + 3, 2, "ER", "EN"):
                    self._add("X", "SK")
                else:
                    self._add("SK")
                return current + 3

            if current == 0 and not self._is_vowel(3) and self._char(3) != "W":
                self._add("X", "S")
            else:
                self._add("X")
            return current + 3

        if self._at(current + 2, 1, "I", "E", "Y"):
            self._add("S")
            return current + 3

        self._add("SK")
        return current + 3

    def _encode_t(self, current: int) -> int:
        if self._at(current, 4, "TION"):
            self._add("X")
            return current + 3

        if self._at(current, 3, "TIA", "TCH"):
            self._add("X")
            return current + 3

        if self._at(current, 2, "TH") or self._at(current, 3, "TTH"):
            # THOMAS, THAMES
            if self._at(current + 2, 2, "OM", "AM") or self._germanic_prefix():
                self._add("T")
            else:
                self._add("0", "T")
            return current + 2

        self._add("T")
        if self._at(current + 1, 1, "T", "D"):
            return current + 2
        return current + 1

    def _encode_v(self, current: int) -> int:
        self._add("F")
        return self._skip_double(current, "V")

    def _encode_w(self, current: int) -> int:
        # Can also be in the middle of a word
        if self._at(current, 2, "WR"):
            self._add("R")
            return current + 2

        if current == 0 and (self._is_vowel(current + 1) or self._at(current, 2, "WH")):
            # WASSERMAN should match VASSERMAN
            if self._is_vowel(current + 1):
                self._add("A", "F")
            else:
                # WHITE should match Witte
                self._add("A")

        # ARNOW should match ARNOFF
        if (
            (current == self._last and self._is_vowel(current - 1))
            or self._at(current - 1, 5, "EWSKI", "EWSKY", "OWSKI", "OWSKY")
            or self._at(0, 3, "SCH")
        ):
            self._add("", "F")
            return current + 1

        # Polish: FILIPOWICZ
        if self._at(current, 4, "WICZ", "WITZ"):
            self._add("TS", "FX")
            return current + 4

        return current + 1

    def _encode_x(self, current: int) -> int:
        # French: BREAUX
        if not (
            current == self._last
            and (self._at(current - 3, 3, "IAU", "EAU") or self._at(current - 2, 2, "AU", "OU"))
        ):
            self._add("KS")

        if self._at(current + 1, 1, "C", "X"):
            return current + 2
        return current + 1

    def _encode_z(self, current: int) -> int:
        # Chinese pinyin: ZHAO
        if self._char(current + 1) == "H":
            self._add("J")
            return current + 2

        if self._at(current + 1, 2, "ZO", "ZI", "ZA") or (
            self._slavo_germanic and current > 0 and self._char(current - 1) != "T"
        ):
            self._add("S", "TS")
        else:
            self._add("S")
        return self._skip_double(current, "Z")


def encode(word: Optional[str]) -> PhoneticKey:
    """Return the Double Metaphone keys of ``word``.

    Parameters
    ----------
    word: str or None
        Word to encode. Case is ignored.

    Returns
    -------
    PhoneticKey
        ``primary`` holds up to four symbols; ``alternate`` is ``None`` unless
        the spelling admits a second pronunciation.
    """
    return DoubleMetaphone(word).keys


# Alias matching the name most callers know the algorithm by
double_metaphone = encode
