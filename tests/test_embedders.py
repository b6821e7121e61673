"""Tests for the hashing text embedder."""

import numpy as np
import pytest

from vector_lens.embedders import (
    BaseEmbedder,
    HashingEmbedder,
    get_embedder,
    list_embedders,
    register_embedder,
)
from vector_lens.embedders.hashing import word_hash


class TestWordHash:

    def test_small_word(self):
        assert word_hash("ab") == 97 * 31 + 98

    def test_known_values(self):
        assert word_hash("hello") == 99162322
        assert word_hash("") == 0

    def test_hashes_utf16_code_units(self):
        # U+1F600 is the surrogate pair D83D DE00
        assert word_hash("a\U0001F600") == (97 * 31 + 0xD83D) * 31 + 0xDE00

    def test_wraps_to_signed_32_bit(self):
        assert word_hash("polygenelubricants") == -2**31


class TestHashingEmbedder:

    def test_repeated_word_fills_one_bucket(self):
        vec = HashingEmbedder(dimension=384).embed_single("Hello hello")
        assert vec.shape == (384,)
        assert vec[99162322 % 384] == pytest.approx(1.0)
        assert np.count_nonzero(vec) == 1

    def test_single_characters_ignored(self):
        embedder = HashingEmbedder(dimension=64)
        np.testing.assert_array_equal(embedder.embed_single("a b c"), np.zeros(64))

    def test_output_is_unit_length(self):
        vec = HashingEmbedder(dimension=128).embed_single("vector search with hashing")
        assert np.linalg.norm(vec) == pytest.approx(1.0)

    def test_batch_shape_and_determinism(self):
        embedder = HashingEmbedder(dimension=32)
        a = embedder.embed(["first text", "second text", ""])
        b = embedder.embed(["first text", "second text", ""])
        assert a.shape == (3, 32)
        np.testing.assert_array_equal(a, b)

    def test_invalid_dimension(self):
        with pytest.raises(ValueError):
            HashingEmbedder(dimension=0)

    def test_registry(self):
        assert "hashing" in list_embedders()
        embedder = get_embedder("hashing", dimension=16)
        assert embedder.dimension == 16
        assert embedder.name == "hashing_16"

    def test_duplicate_registration_rejected(self):
        with pytest.raises(ValueError, match="already registered"):
            register_embedder("hashing")(type("OtherHashing", (HashingEmbedder,), {}))

    def test_custom_embedder_gets_registry_name(self):
        @register_embedder("constant_test")
        class ConstantEmbedder(BaseEmbedder):
            def _embed_text(self, text):
                return np.ones(self.dimension)

        embedder = get_embedder("constant_test", dimension=4)
        assert embedder.name == "constant_test_4"
        np.testing.assert_allclose(embedder.embed_single("anything"), np.full(4, 0.5))

    def test_unknown_embedder(self):
        with pytest.raises(ValueError, match="Unknown embedder"):
            get_embedder("openai", dimension=8)
