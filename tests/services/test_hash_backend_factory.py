import hashlib
from types import MappingProxyType

import pytest

import services.hash_backend_factory as factory
from models.digest_options import HASH_SEED, HashAlgorithm
from services.hash_backend_factory import (
    BackendCapability,
    BackendUnavailableError,
    create_hash_engine,
    get_backend_capability,
    is_algorithm_available,
    list_backends,
    probe_provider,
)
from services.hash_implementations.hash_interface import HashEngine
from services.hash_implementations.hashlib_implementation import HashlibEngine
from services.hash_implementations.xxhash_implementation import XXHashEngine


@pytest.fixture
def without_metrohash(mocker):
    """Pretend the optional metrohash module is not installed."""
    capabilities = dict(factory.BACKEND_CAPABILITIES)
    capabilities["metrohash"] = BackendCapability(
        provider="metrohash",
        package="metrohash",
        available=False,
        reason="No module named 'metrohash'",
    )
    mocker.patch.object(factory, "BACKEND_CAPABILITIES", MappingProxyType(capabilities))


@pytest.fixture
def without_xxhash(mocker):
    capabilities = dict(factory.BACKEND_CAPABILITIES)
    capabilities["xxhash"] = BackendCapability(provider="xxhash", package="xxhash", available=False)
    mocker.patch.object(factory, "BACKEND_CAPABILITIES", MappingProxyType(capabilities))


def test_capability_registry_is_read_only():
    with pytest.raises(TypeError):
        factory.BACKEND_CAPABILITIES["xxhash"] = None


def test_xxhash_is_available():
    capability = get_backend_capability(HashAlgorithm.XXHASH128)
    assert capability.available
    assert capability.module is not None


def test_hashlib_algorithms_have_no_capability_entry():
    assert get_backend_capability("sha256") is None
    assert is_algorithm_available("sha256")
    assert not is_algorithm_available("not-a-hash")


def test_probe_missing_module(mocker):
    mocker.patch.dict(factory.PROVIDERS, {"ghosthash": ("ghosthash_does_not_exist", "ghosthash", XXHashEngine)})
    capability = probe_provider("ghosthash")
    assert not capability.available
    assert capability.module is None
    assert "ghosthash_does_not_exist" in capability.reason


@pytest.mark.parametrize("name", ["md5", "sha1", "sha256", "SHA512", "blake2b"])
def test_hashlib_names_are_forwarded(name):
    engine = create_hash_engine(name)
    assert isinstance(engine, HashlibEngine)
    engine.update(b"abc")
    assert engine.finalize() == hashlib.new(name.lower(), b"abc").digest()


@pytest.mark.parametrize("name", ["not-a-hash", "shake_256", ""])
def test_unsupported_algorithms(name):
    with pytest.raises(ValueError, match="Unsupported hash algorithm"):
        create_hash_engine(name)


@pytest.mark.parametrize("algorithm,size", [
    (HashAlgorithm.XXHASH32, 4),
    (HashAlgorithm.XXHASH64, 8),
    (HashAlgorithm.XXHASH128, 16),
    ("xxhash128", 16),
])
def test_xxhash_engines(algorithm, size):
    engine = create_hash_engine(algorithm)
    assert isinstance(engine, XXHashEngine)
    assert isinstance(engine, HashEngine)
    engine.update(b"hello ")
    engine.update(b"world")
    digest = engine.finalize()
    assert len(digest) == size == engine.digest_size


def test_xxhash_engines_use_fixed_seed():
    xxhash = pytest.importorskip("xxhash")
    engine = create_hash_engine(HashAlgorithm.XXHASH64)
    engine.update(b"seeded")
    digest = engine.finalize()
    assert digest == xxhash.xxh64(b"seeded", seed=HASH_SEED).digest()
    assert digest != xxhash.xxh64(b"seeded").digest()


def test_metrohash_engines():
    pytest.importorskip("metrohash")
    engine = create_hash_engine("metrohash128")
    engine.update(b"abc")
    assert len(engine.finalize()) == 16
    engine = create_hash_engine("metrohash64")
    engine.update(b"abc")
    assert len(engine.finalize()) == 8


@pytest.mark.parametrize("algorithm", ["metrohash64", "metrohash128"])
def test_unavailable_backend_fails_at_selection(without_metrohash, algorithm):
    with pytest.raises(BackendUnavailableError) as exc_info:
        create_hash_engine(algorithm)
    assert "pip install metrohash" in str(exc_info.value)
    assert exc_info.value.algorithm == algorithm
    assert exc_info.value.package == "metrohash"


def test_unavailable_default_backend(without_xxhash):
    with pytest.raises(BackendUnavailableError, match="xxhash"):
        create_hash_engine("xxhash128")
    assert not is_algorithm_available("xxhash32")
    # hashlib stays usable
    assert isinstance(create_hash_engine("sha1"), HashlibEngine)


def test_list_backends(without_metrohash):
    backends = {backend["algorithm"]: backend for backend in list_backends()}
    assert backends["xxhash128"]["available"]
    assert backends["xxhash128"]["provider"] == "xxhash"
    assert not backends["metrohash128"]["available"]
    assert backends["metrohash128"]["package"] == "metrohash"
    assert backends["sha256"]["provider"] == "hashlib"
    assert backends["sha256"]["package"] is None
    assert not any(name.startswith("shake_") for name in backends)


def test_each_selection_returns_a_fresh_engine():
    first = create_hash_engine("xxhash128")
    second = create_hash_engine("xxhash128")
    assert first is not second
    first.update(b"only in first")
    second.update(b"other")
    assert first.finalize() != second.finalize()
