"""Tests for the columnar transposition engine."""

import random
import string

import pytest

from codebreakers.core.exceptions import InvalidKeyError
from codebreakers.services.engines.transposition.columnar import (
    ColumnarEngine,
    column_heights,
    decipher,
    derive_key,
    encipher,
)
from codebreakers.services.output.formatter import format_output
from codebreakers.services.preprocessing.normalizer import sanitize


class TestDeriveKey:
    """Test keyphrase to key conversion."""

    def test_distinct_letters(self):
        assert derive_key("BACD") == [1, 0, 2, 3]

    def test_repeated_letters(self):
        assert derive_key("BAACDDZZXY") == [2, 0, 1, 3, 4, 5, 8, 9, 6, 7]

    def test_repeated_letters_short(self):
        assert derive_key("BAACDD") == [2, 0, 1, 3, 4, 5]

    def test_zebras(self):
        assert derive_key("ZEBRAS") == [5, 2, 1, 3, 0, 4]

    def test_empty_keyphrase(self):
        assert derive_key("") == []

    def test_single_letter_repeated(self):
        assert derive_key("AAAA") == [0, 1, 2, 3]

    def test_key_is_always_a_permutation(self):
        """Sorting any derived key gives 0..n-1."""
        rng = random.Random(1234)
        for _ in range(300):
            length = rng.randint(0, 40)
            # Small alphabet to force plenty of repeats
            keyphrase = "".join(rng.choice("ABCDEZ") for _ in range(length))
            key = derive_key(keyphrase)
            assert sorted(key) == list(range(length)), keyphrase

    def test_matches_stable_sort_ranking(self):
        """Rank equals position in a stable sort of the keyphrase."""
        rng = random.Random(99)
        for _ in range(100):
            keyphrase = "".join(
                rng.choice(string.ascii_uppercase) for _ in range(rng.randint(1, 30))
            )
            ranking = sorted(range(len(keyphrase)), key=lambda p: keyphrase[p])
            expected = [0] * len(keyphrase)
            for rank, position in enumerate(ranking):
                expected[position] = rank
            assert derive_key(keyphrase) == expected


class TestColumnHeights:
    """Pin the irregular column heights used when deciphering."""

    def test_even_division(self):
        assert column_heights(derive_key("CAB"), 12) == [4, 4, 4]

    def test_one_extra_row(self):
        # Only the column under the first keyphrase letter (C, rank 2) is long
        assert column_heights(derive_key("CAB"), 16) == [5, 5, 6]

    def test_four_letter_key_over_fifteen_letters(self):
        # CODE -> [0, 3, 1, 2]; positions 0..2 hold ranks 0, 3, 1
        assert column_heights(derive_key("CODE"), 15) == [4, 4, 3, 4]

    def test_heights_partition_length(self):
        rng = random.Random(7)
        for _ in range(200):
            keyphrase = "".join(rng.choice("ABCXYZ") for _ in range(rng.randint(1, 12)))
            length = rng.randint(0, 60)
            heights = column_heights(derive_key(keyphrase), length)
            assert sum(heights) == length
            assert max(heights) - min(heights) <= 1

    def test_message_shorter_than_key(self):
        assert column_heights(derive_key("ZEBRAS"), 2) == [0, 0, 1, 0, 0, 1]

    def test_empty_key(self):
        assert column_heights([], 0) == []


class TestEncipherDecipher:
    """Test the transposition itself."""

    def test_zebras_vector(self):
        key = derive_key("ZEBRAS")
        plaintext = sanitize("WE ARE DISCOVERED. FLEE AT ONCE")

        ciphertext = encipher(key, plaintext)

        assert format_output(ciphertext) == "EVLNA CDTES EAROF ODEEC WIREE"

    def test_zebras_vector_decipher(self):
        key = derive_key("ZEBRAS")

        plaintext = decipher(key, sanitize("EVLNA CDTES EAROF ODEEC WIREE"))

        assert format_output(plaintext) == "WEARE DISCO VERED FLEEA TONCE"

    def test_cab_vector(self):
        key = derive_key("CAB")

        ciphertext = encipher(key, sanitize("ATTACK AT DAWN"))

        assert format_output(ciphertext) == "TCTWT KDNAA AA"
        assert format_output(decipher(key, ciphertext)) == "ATTAC KATDA WN"

    def test_cab_uneven_vector(self):
        key = derive_key("CAB")

        ciphertext = encipher(key, sanitize("NO JUSTICE NO PEACE"))

        assert format_output(ciphertext) == "OSCOA JTEPC NUINE E"
        assert decipher(key, ciphertext) == "NOJUSTICENOPEACE"

    def test_uneven_division_four_columns(self):
        key = derive_key("CODE")

        ciphertext = encipher(key, "WEAREDISCOVERED")

        assert ciphertext == "WECRAIVDRSEEDOE"
        assert decipher(key, ciphertext) == "WEAREDISCOVERED"

    def test_round_trip(self):
        rng = random.Random(2024)
        for _ in range(300):
            keyphrase = "".join(
                rng.choice(string.ascii_uppercase) for _ in range(rng.randint(1, 15))
            )
            text = "".join(
                rng.choice(string.ascii_uppercase) for _ in range(rng.randint(0, 80))
            )
            key = derive_key(keyphrase)
            assert decipher(key, encipher(key, text)) == text, (keyphrase, text)

    def test_encipher_is_a_permutation_of_letters(self):
        key = derive_key("KEYWORD")
        text = "THEQUICKBROWNFOXJUMPSOVERTHELAZYDOG"

        assert sorted(encipher(key, text)) == sorted(text)

    def test_single_column_is_identity(self):
        key = derive_key("Q")
        assert encipher(key, "HELLO") == "HELLO"
        assert decipher(key, "HELLO") == "HELLO"

    def test_empty_text(self):
        key = derive_key("ZEBRAS")
        assert encipher(key, "") == ""
        assert decipher(key, "") == ""


class TestEmptyKey:
    """An empty key only works on empty text."""

    def test_encipher_rejects_empty_key(self):
        with pytest.raises(InvalidKeyError):
            encipher([], "ANY")

    def test_decipher_rejects_empty_key(self):
        with pytest.raises(InvalidKeyError):
            decipher([], "ANY")

    def test_empty_key_and_empty_text(self):
        assert encipher([], "") == ""
        assert decipher([], "") == ""

    def test_malformed_key_is_fatal(self):
        """A key that is not a permutation exhausts a column."""
        with pytest.raises(IndexError):
            decipher([0, 0], "ABC")


class TestColumnarEngine:
    """Test the registered engine wrapper."""

    @pytest.fixture
    def engine(self):
        return ColumnarEngine()

    def test_encrypt_sanitizes_input(self, engine):
        assert engine.encrypt("We are discovered. Flee at once", "zebras") == (
            "EVLNACDTESEAROFODEECWIREE"
        )

    def test_decrypt_with_key(self, engine):
        result = engine.decrypt_with_key("EVLNA CDTES EAROF ODEEC WIREE", "ZEBRAS")

        assert result.plaintext == "WEAREDISCOVEREDFLEEATONCE"
        assert result.key == "ZEBRAS"
        assert "6,3,2,4,1,5" in result.explanation

    def test_sanitized_and_raw_input_agree(self, engine):
        raw = "Attack at dawn!"
        assert engine.encrypt(raw, "CAB") == engine.encrypt(sanitize(raw), "CAB")
        assert engine.encrypt(sanitize(raw), "CAB") == engine.encrypt(
            sanitize(sanitize(raw)), "CAB"
        )

    def test_numeric_order_matches_keyword(self, engine):
        assert engine.encrypt("ATTACKATDAWN", "3,1,2") == engine.encrypt("ATTACKATDAWN", "CAB")

    def test_numeric_order_round_trip(self, engine):
        ciphertext = engine.encrypt("WEAREDISCOVERED", [2, 4, 1, 3])
        result = engine.decrypt_with_key(ciphertext, "2,4,1,3")

        assert result.plaintext == "WEAREDISCOVERED"
        assert result.key == "2,4,1,3"

    def test_dict_key(self, engine):
        assert engine.encrypt("ATTACKATDAWN", {"keyword": "CAB"}) == "TCTWTKDNAAAA"

    def test_empty_keyword_rejected(self, engine):
        with pytest.raises(InvalidKeyError):
            engine.encrypt("ATTACK", "!!!")

    def test_invalid_order_rejected(self, engine):
        with pytest.raises(InvalidKeyError):
            engine.encrypt("ATTACK", "1,1,2")

    def test_non_integer_order_list_rejected(self, engine):
        with pytest.raises(InvalidKeyError):
            engine.encrypt("ATTACK", {"order": ["x", "y"]})
        with pytest.raises(InvalidKeyError):
            engine.encrypt("ATTACK", [1, None])

    def test_explain_empty_key(self, engine):
        result = engine.decrypt_with_key("", "!!!")

        assert result.plaintext == ""
        assert "empty key" in result.explanation
        assert "column order" not in result.explanation

    def test_bytes_input(self, engine):
        assert engine.encrypt(b"ATTACK\xff AT DAWN", "CAB") == "TCTWTKDNAAAA"

    def test_validate_key(self, engine):
        assert engine.validate_key("ZEBRAS")
        assert engine.validate_key("3,1,2")
        assert not engine.validate_key("1,3")
        assert not engine.validate_key("1,x")
        assert not engine.validate_key("")

    def test_generate_random_key(self, engine):
        for _ in range(20):
            key = engine.generate_random_key()
            assert engine.validate_key(key)
            assert 4 <= len(key) <= 8
