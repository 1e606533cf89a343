import logging
import os
import sys
import pytest
from pathlib import Path
from click.testing import CliRunner

# Add project root to sys.path for local imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from models.digest_options import DigestOptions
from services.hashing_service import HashingService
from utils.asset_hash_config import write_temp_config
from cli.main import asset_hash_cli

# ────────────────────────────────────────────────
# FILE FIXTURES
# ────────────────────────────────────────────────

ASSET_CONTENT = b"body { background: url(logo.png); }\n" * 100


@pytest.fixture
def asset_file(tmp_path) -> Path:
    """A small fixed-content asset file."""
    path = tmp_path / "styles.css"
    path.write_bytes(ASSET_CONTENT)
    return path


@pytest.fixture
def large_asset_file(tmp_path) -> Path:
    """An asset larger than several read chunks, with non-repeating content."""
    path = tmp_path / "bundle.js"
    path.write_bytes(bytes((i * 31 + 7) % 256 for i in range(300_000)))
    return path


@pytest.fixture
def missing_file(tmp_path) -> Path:
    return tmp_path / "does-not-exist.png"


# ────────────────────────────────────────────────
# CONFIGURATION FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def clear_env_overrides(monkeypatch):
    """Keep ASSET_HASH_* variables from the developer environment out of tests."""
    for name in list(os.environ):
        if name.startswith("ASSET_HASH_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def test_config_path(tmp_path) -> Path:
    """Create a temporary configuration file for asset-hash tests."""
    return write_temp_config(
        {"Hashing": {"hash": "sha256", "encoding": "base62", "max_length": "12", "chunk_size": "4096"}},
        str(tmp_path),
    )


@pytest.fixture
def digest_options() -> DigestOptions:
    return DigestOptions()


@pytest.fixture
def hashing_service(digest_options) -> HashingService:
    return HashingService(digest_options, chunk_size=1024)


# ────────────────────────────────────────────────
# CLI FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture
def cli_runner():
    """Provide a Click test runner."""
    return CliRunner()


@pytest.fixture
def cli():
    """Provide the asset-hash CLI group."""
    return asset_hash_cli


@pytest.fixture
def cli_obj(hashing_service, digest_options):
    """Context object as built by the CLI group, for invoking commands directly."""
    return {
        "config": {},
        "options": digest_options,
        "hashing_service": hashing_service,
        "chunk_size": hashing_service.chunk_size,
        "config_path": None,
    }


# ────────────────────────────────────────────────
# CLEANUP FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler and level changes made by setup_logging during a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
