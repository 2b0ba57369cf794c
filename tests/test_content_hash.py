"""Tests for content hashing."""

import hashlib

import pytest

from common.content_hash import (
    HASH_ALGORITHM,
    HASH_LENGTH,
    IncrementalContentHasher,
    compute_content_hash,
    is_valid_hash,
    verify_content_hash,
)

HELLO_HASH = "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"


def test_known_digest():
    assert compute_content_hash(b"hello") == HELLO_HASH


def test_hash_is_deterministic():
    payload = bytes(range(256)) * 10
    assert compute_content_hash(payload) == compute_content_hash(payload)


def test_hash_shape():
    digest = compute_content_hash(b"")
    assert len(digest) == HASH_LENGTH
    assert digest == digest.lower()
    assert is_valid_hash(digest)


def test_different_payloads_differ():
    assert compute_content_hash(b"hello") != compute_content_hash(b"hello!")


def test_hash_does_not_mutate_input():
    payload = bytearray(b"data")
    compute_content_hash(bytes(payload))
    assert payload == bytearray(b"data")


def test_verify_content_hash():
    assert verify_content_hash(b"hello", HELLO_HASH)
    assert not verify_content_hash(b"hellO", HELLO_HASH)


@pytest.mark.parametrize("value", [
    "",
    "abc",
    HELLO_HASH.upper(),
    HELLO_HASH[:-1] + "g",
    HELLO_HASH + "0",
    hashlib.md5(b"hello").hexdigest(),
])
def test_is_valid_hash_rejects_malformed(value):
    assert not is_valid_hash(value)


class TestIncrementalContentHasher:
    """Test hashing data fed in pieces."""

    def test_matches_one_shot_hash(self):
        hasher = IncrementalContentHasher()
        hasher.update(b"he")
        hasher.update(b"ll")
        hasher.update(b"o")
        assert hasher.finalize() == HELLO_HASH

    def test_update_after_finalize_raises(self):
        hasher = IncrementalContentHasher()
        hasher.finalize()
        with pytest.raises(ValueError):
            hasher.update(b"more")

    def test_reset(self):
        hasher = IncrementalContentHasher()
        hasher.update(b"junk")
        hasher.finalize()
        hasher.reset()
        hasher.update(b"hello")
        assert hasher.finalize() == HELLO_HASH

    def test_finalize_is_idempotent(self):
        hasher = IncrementalContentHasher()
        hasher.update(b"hello")
        assert hasher.finalize() == HELLO_HASH
        assert hasher.finalize() == HELLO_HASH
        assert hasher.finalized

    def test_tracks_bytes_hashed(self):
        hasher = IncrementalContentHasher().update(b"hel").update(b"lo")
        assert hasher.bytes_hashed == 5
        hasher.reset()
        assert hasher.bytes_hashed == 0
        assert not hasher.finalized

    def test_algorithm_matches_module(self):
        hasher = IncrementalContentHasher()
        assert hasher.algorithm == HASH_ALGORITHM
        assert len(hasher.finalize()) == HASH_LENGTH


def test_verify_rejects_malformed_expected():
    assert not verify_content_hash(b"hello", HELLO_HASH.upper())
