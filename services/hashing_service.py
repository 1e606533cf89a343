"""
HashingService: streaming file digests formatted as short cache-busting strings.

Defaults to a 1 MiB chunk size for large file efficiency.
"""

from __future__ import annotations

import asyncio
import logging
import os
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, Union

from models.digest_options import DigestOptions, HashAlgorithm
from models.digest_result import DigestResult
from services.hash_backend_factory import create_hash_engine
from services.hash_implementations.hash_interface import HashEngine
from utils.digest_formatter import format_digest

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1_048_576

FileSource = Union[str, os.PathLike, BinaryIO]


class DigestAccumulator:
    """
    Feeds chunks to one hash engine and finalizes it exactly once.

    An accumulator belongs to a single digest computation. The digest does not
    depend on how the input is split into chunks.
    """

    def __init__(self, engine: HashEngine) -> None:
        self._engine = engine
        self._finalized = False
        self.bytes_processed = 0

    @property
    def algorithm(self) -> str:
        return self._engine.name

    @property
    def finalized(self) -> bool:
        return self._finalized

    def update(self, chunk: Union[bytes, bytearray, memoryview, str]) -> None:
        if self._finalized:
            raise RuntimeError("DigestAccumulator already finalized")
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        if not chunk:
            return
        self._engine.update(bytes(chunk))
        self.bytes_processed += len(chunk)

    def finalize(self) -> bytes:
        if self._finalized:
            raise RuntimeError("DigestAccumulator already finalized")
        self._finalized = True
        return bytes(self._engine.finalize())


class PipelineState(str, Enum):
    """Lifecycle of a FileDigestPipeline."""
    IDLE = "idle"
    READING = "reading"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


def source_name(source: FileSource) -> str:
    """Path or file name of a source, used for extensions and log messages."""
    if isinstance(source, (str, os.PathLike)):
        return os.fspath(source)
    name = getattr(source, "name", "")
    return name if isinstance(name, str) else ""


def source_extension(source: FileSource) -> str:
    """Original extension including the leading dot, or an empty string."""
    return Path(source_name(source)).suffix


class FileDigestPipeline:
    """
    Reads one file as a chunk stream and returns its raw digest.

    The hash engine is selected when the pipeline is built, so an unavailable
    backend fails before the file is opened. I/O errors move the pipeline to
    FAILED and propagate unchanged; no partial digest is ever produced.

    Attributes:
        state (PipelineState): Current lifecycle state.
    """

    def __init__(
        self,
        source: FileSource,
        algorithm: Union[str, HashAlgorithm],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.source = source
        self.chunk_size = chunk_size
        self.accumulator = DigestAccumulator(create_hash_engine(algorithm))
        self.state = PipelineState.IDLE

    def _transition(self, state: PipelineState) -> None:
        logger.debug(f"{source_name(self.source)}: {self.state.value} -> {state.value}")
        self.state = state

    async def run(self) -> bytes:
        if self.state is not PipelineState.IDLE:
            raise RuntimeError(f"Pipeline already used (state={self.state.value})")

        self._transition(PipelineState.READING)
        try:
            if isinstance(self.source, (str, os.PathLike)):
                handle = await asyncio.to_thread(open, self.source, "rb")
                with handle:
                    await self._read_all(handle)
            else:
                await self._read_all(self.source)
        except Exception:
            self._transition(PipelineState.FAILED)
            raise

        self._transition(PipelineState.FINALIZING)
        raw_digest = self.accumulator.finalize()
        self._transition(PipelineState.DONE)
        return raw_digest

    async def _read_all(self, handle: BinaryIO) -> None:
        while True:
            chunk = await asyncio.to_thread(handle.read, self.chunk_size)
            if not chunk:
                break
            self.accumulator.update(chunk)


class HashingService:
    """
    Provides streaming digest operations for asset files.

    - Output is encoded per DigestOptions.encoding and truncated to max_length
    - Hashed names keep the original file extension
    """

    def __init__(self, options: Optional[DigestOptions] = None, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.options = options or DigestOptions()
        self.chunk_size = chunk_size

    def create_accumulator(self) -> DigestAccumulator:
        return DigestAccumulator(create_hash_engine(self.options.hash))

    def format_raw_digest(self, raw_digest: bytes) -> str:
        return format_digest(raw_digest, self.options.encoding, self.options.max_length)

    def hash_bytes(self, data: Union[bytes, str]) -> str:
        accumulator = self.create_accumulator()
        accumulator.update(data)
        return self.format_raw_digest(accumulator.finalize())

    async def compute_digest(self, source: FileSource) -> bytes:
        pipeline = FileDigestPipeline(source, self.options.hash, self.chunk_size)
        return await pipeline.run()

    async def compute_hash(self, source: FileSource) -> str:
        return self.format_raw_digest(await self.compute_digest(source))

    async def compute_hashed_name(self, source: FileSource) -> str:
        return await self.compute_hash(source) + source_extension(source)

    async def compute_result(self, source: FileSource) -> DigestResult:
        return DigestResult(
            path=source_name(source),
            digest=await self.compute_hash(source),
            algorithm=self.options.hash,
            encoding=self.options.encoding,
            max_length=self.options.max_length,
        )

    async def compute_hashes(self, sources: Iterable[FileSource]) -> List[DigestResult]:
        """
        Hash many files concurrently. Each file gets its own pipeline.

        Returns:
            list: One DigestResult per source, in input order. Repeated or
            unnamed sources each keep their own entry.

        Raises:
            OSError: The first I/O failure among the files.
        """
        return list(await asyncio.gather(*(self.compute_result(source) for source in sources)))

    def compute_hash_sync(self, source: Union[str, "os.PathLike[str]"]) -> str:
        accumulator = self.create_accumulator()
        with open(source, "rb") as f:
            while True:
                data = f.read(self.chunk_size)
                if not data:
                    break
                accumulator.update(data)
        return self.format_raw_digest(accumulator.finalize())
