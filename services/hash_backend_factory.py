"""
This module provides a factory for creating hash engine instances from an algorithm name.

Fast hash providers are optional Python modules. They are probed once when this module
is imported and the outcome is kept in BACKEND_CAPABILITIES, a read-only mapping that
lives for the rest of the process. Selecting an algorithm whose provider is missing
fails right away with BackendUnavailableError, before any bytes are hashed.
"""
import hashlib
import importlib
import logging
from dataclasses import dataclass
from types import MappingProxyType, ModuleType
from typing import Callable, Dict, List, Mapping, Optional, Union

from models.digest_options import HashAlgorithm, is_hashlib_algorithm
from services.hash_implementations.hash_interface import HashEngine
from services.hash_implementations.hashlib_implementation import HashlibEngine
from services.hash_implementations.metrohash_implementation import MetroHashEngine
from services.hash_implementations.xxhash_implementation import XXHashEngine

logger = logging.getLogger(__name__)


class BackendUnavailableError(RuntimeError):
    """Raised when an algorithm's optional provider module is not installed."""

    def __init__(self, algorithm: str, package: str, reason: Optional[str] = None):
        message = f"Install {package} module to use {algorithm} hasher (pip install {package})"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.algorithm = algorithm
        self.package = package
        self.reason = reason


@dataclass(frozen=True)
class BackendCapability:
    """Availability of one optional hash provider."""
    provider: str
    package: str
    available: bool
    module: Optional[ModuleType] = None
    reason: Optional[str] = None

    def __str__(self) -> str:
        status = "✓ Available" if self.available else "✗ Unavailable"
        result = f"{self.provider}: {status}"
        if self.reason:
            result += f" ({self.reason})"
        return result


# provider -> (import name, PyPI package, engine class)
PROVIDERS = {
    "xxhash": ("xxhash", "xxhash", XXHashEngine),
    "metrohash": ("metrohash", "metrohash", MetroHashEngine),
}

ALGORITHM_PROVIDERS = {
    HashAlgorithm.XXHASH32: "xxhash",
    HashAlgorithm.XXHASH64: "xxhash",
    HashAlgorithm.XXHASH128: "xxhash",
    HashAlgorithm.METROHASH64: "metrohash",
    HashAlgorithm.METROHASH128: "metrohash",
}


def probe_provider(provider: str) -> BackendCapability:
    """
    Try to import a provider module and report whether it can be used.

    Args:
        provider: Key in PROVIDERS.

    Returns:
        BackendCapability: Available with the module, or unavailable with the reason.
    """
    import_name, package, _ = PROVIDERS[provider]
    try:
        module = importlib.import_module(import_name)
    except ImportError as e:
        logger.debug(f"Optional hash provider {provider} not available: {e}")
        return BackendCapability(provider=provider, package=package, available=False, reason=str(e))
    logger.debug(f"Optional hash provider {provider} available")
    return BackendCapability(provider=provider, package=package, available=True, module=module)


def probe_backends() -> Mapping[str, BackendCapability]:
    """Probe every provider and freeze the result."""
    return MappingProxyType({provider: probe_provider(provider) for provider in PROVIDERS})


BACKEND_CAPABILITIES: Mapping[str, BackendCapability] = probe_backends()


def get_backend_capability(algorithm: Union[str, HashAlgorithm]) -> Optional[BackendCapability]:
    """
    Look up the capability behind an algorithm.

    Returns:
        BackendCapability for fast-hash algorithms, None for hashlib algorithms.
    """
    fast = algorithm if isinstance(algorithm, HashAlgorithm) else HashAlgorithm.lookup(algorithm)
    if fast is None:
        return None
    return BACKEND_CAPABILITIES[ALGORITHM_PROVIDERS[fast]]


def is_algorithm_available(algorithm: Union[str, HashAlgorithm]) -> bool:
    """True when create_hash_engine(algorithm) would succeed."""
    capability = get_backend_capability(algorithm)
    if capability is None:
        return is_hashlib_algorithm(str(algorithm))
    return capability.available


def list_backends() -> List[Dict[str, object]]:
    """
    Describe every fast-hash algorithm and the hashlib algorithms.

    Returns:
        list: One dict per algorithm with keys algorithm, provider, package, available, reason.
    """
    backends = []
    for algorithm in HashAlgorithm:
        capability = get_backend_capability(algorithm)
        backends.append({
            "algorithm": algorithm.value,
            "provider": capability.provider,
            "package": capability.package,
            "available": capability.available,
            "reason": capability.reason,
        })
    hashlib_names = {name.lower() for name in hashlib.algorithms_available}
    for name in sorted(n for n in hashlib_names if is_hashlib_algorithm(n)):
        backends.append({
            "algorithm": name,
            "provider": "hashlib",
            "package": None,
            "available": True,
            "reason": None,
        })
    return backends


def create_hash_engine(algorithm: Union[str, HashAlgorithm]) -> HashEngine:
    """
    Create and return the hash engine for an algorithm.

    Args:
        algorithm: A HashAlgorithm value or any fixed-length hashlib algorithm name.

    Returns:
        HashEngine: A fresh engine owned by the caller.

    Raises:
        BackendUnavailableError: If the algorithm's optional provider is not installed.
        ValueError: If the algorithm is not supported.
    """
    fast = algorithm if isinstance(algorithm, HashAlgorithm) else HashAlgorithm.lookup(str(algorithm))

    if fast is not None:
        capability = get_backend_capability(fast)
        if not capability.available:
            raise BackendUnavailableError(fast.value, capability.package, capability.reason)
        engine_class: Callable[..., HashEngine] = PROVIDERS[capability.provider][2]
        logger.debug(f"Selected {capability.provider} engine for {fast.value}")
        return engine_class(capability.module, fast)

    name = str(algorithm).strip().lower()
    if not is_hashlib_algorithm(name):
        raise ValueError(f"Unsupported hash algorithm: {algorithm}")
    logger.debug(f"Selected hashlib engine for {name}")
    return HashlibEngine(name)
