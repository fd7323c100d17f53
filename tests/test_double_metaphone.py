import unittest

import pytest

from fuzzytree.double_metaphone import DoubleMetaphone, PhoneticKey, double_metaphone, encode


@pytest.mark.parametrize(
    "word, primary, alternate",
    [
        ("Smith", "SM0", "XMT"),
        ("Schmidt", "XMT", "SMT"),
        ("Xavier", "SF", "SFR"),
        ("Agnes", "AKNS", "ANS"),
        ("Agnew", "AKN", "AKNF"),
        ("Knight", "NT", None),
        ("Wright", "RT", None),
        ("Philip", "FLP", None),
        ("Jose", "HS", None),
        ("Caesar", "SSR", None),
        ("Nation", "NXN", None),
        ("Christopher", "KRST", None),
        ("Anna", "AN", None),
        ("Peña", "PN", None),
        ("ça", "S", None),
    ],
)
def test_known_keys(word, primary, alternate):
    assert encode(word) == PhoneticKey(primary, alternate)


class TestDoubleMetaphone(unittest.TestCase):
    def test_deterministic(self):
        self.assertEqual(encode("Thompson"), encode("Thompson"))

    def test_case_insensitive(self):
        self.assertEqual(encode("smith"), encode("SMITH"))
        self.assertEqual(encode("sChMiDt"), encode("Schmidt"))

    def test_empty_word(self):
        self.assertEqual(encode(""), PhoneticKey("", None))
        self.assertEqual(encode(None), PhoneticKey("", None))

    def test_keys_never_exceed_four_symbols(self):
        for word in ["Christopherson", "Wolfeschlegelsteinhausen", "Tchaikovsky", "Zbigniew"]:
            keys = encode(word)
            self.assertLessEqual(len(keys.primary), 4)
            if keys.alternate is not None:
                self.assertLessEqual(len(keys.alternate), 4)

    def test_non_letters_are_skipped(self):
        self.assertEqual(encode("O'Neil").primary, "ANL")
        self.assertEqual(encode("123").primary, "")

    def test_slavo_germanic_keeps_k(self):
        # "Agnes" gets an N-only alternate, the Slavo-Germanic "Agnew" does not
        self.assertEqual(encode("Agnes").alternate, "ANS")
        self.assertEqual(encode("Agnew").primary, "AKN")

    def test_reuse_encoder(self):
        mp = DoubleMetaphone("Smith")
        self.assertEqual(mp.word, "Smith")
        self.assertEqual(mp.alternate_key, "XMT")

        mp.compute_keys("Knight")
        self.assertEqual(mp.word, "Knight")
        self.assertEqual(mp.primary_key, "NT")
        self.assertIsNone(mp.alternate_key)
        self.assertEqual(mp.keys, encode("Knight"))

    def test_alias(self):
        self.assertIs(double_metaphone, encode)

    def test_emitted_symbols_belong_to_alphabet(self):
        alphabet = set("AFHJKLMNPRSTX0")
        words = ["Bacher", "Chianti", "Czerny", "Focaccia", "Accident", "Edgar",
                 "Ghislane", "Laugh", "Cagney", "Tagliaro", "Gallegos", "Hochmeier",
                 "Island", "Sugar", "Holsheim", "Schenker", "Thomas", "Filipowicz",
                 "Breaux", "Zhao", "Jankelowicz", "Bajador", "Thumb", "Campbell"]
        for word in words:
            keys = encode(word)
            self.assertTrue(set(keys.primary) <= alphabet, word)
            if keys.alternate is not None:
                self.assertTrue(set(keys.alternate) <= alphabet, word)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
