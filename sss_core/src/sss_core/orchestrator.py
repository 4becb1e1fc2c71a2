"""Fan out per-chunk split/combine work and reassemble ordered results."""
from __future__ import annotations

import os
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TYPE_CHECKING

import structlog

from .chunker import chunk_bound, join_chunks, split_chunks
from .encoder import decode_text, encode
from .errors import ShareValidationError
from .field import PrimeField
from .interpolation import reconstruct
from .polynomial import split_value
from .shares import ShareBundle, transpose
from .utils.validation import (
    validate_combine_tokens,
    validate_share_numbers,
    validate_split_parameters,
)

if TYPE_CHECKING:
    from .config import AppConfig

logger = structlog.get_logger(__name__)

_EXECUTORS = {"thread": ThreadPoolExecutor, "process": ProcessPoolExecutor}


def _split_chunk(field: PrimeField, index: int, chunk: str, n: int, t: int) -> Tuple[int, List[int]]:
    return index, split_value(field, encode(chunk), n, t)


def _combine_chunk(field: PrimeField, index: int, points: Dict[int, int]) -> Tuple[int, str]:
    return index, decode_text(reconstruct(field, points))


class ShareOrchestrator:
    """Split secrets into share bundles and combine bundles back.

    Each chunk is handled by its own worker task. Tasks hand back
    ``(chunk_index, result)`` and the collector places results by index, so
    completion order never affects the output.
    """

    def __init__(
        self,
        field: PrimeField | None = None,
        *,
        chunk_size: int | None = None,
        executor: str = "thread",
        max_workers: int | None = None,
    ) -> None:
        if executor not in _EXECUTORS:
            raise ValueError(f"Unknown executor '{executor}', expected one of {sorted(_EXECUTORS)}")
        self.field = field or PrimeField()
        self.chunk_size = chunk_bound(self.field, chunk_size)
        self._executor_cls = _EXECUTORS[executor]
        self._max_workers = max_workers

    @classmethod
    def from_config(cls, config: "AppConfig") -> "ShareOrchestrator":
        return cls(
            PrimeField(config.field.modulus),
            chunk_size=config.field.chunk_size,
            executor=config.concurrency.executor,
            max_workers=config.concurrency.max_workers,
        )

    def split(self, secret: str, n: int, t: int) -> List[ShareBundle]:
        validate_split_parameters(secret, n, t)
        chunks = split_chunks(secret, self.chunk_size)
        logger.info("split.start", chunks=len(chunks), shares=n, threshold=t)
        per_chunk = self._fan_out(_split_chunk, [(chunk, n, t) for chunk in chunks])
        bundles = transpose(per_chunk)
        logger.info("split.done", bundles=len(bundles))
        return bundles

    def combine(self, tokens: Sequence[str]) -> str:
        """Reconstruct a secret from flattened ``x bundle x bundle ...`` tokens."""
        validate_combine_tokens(tokens, self.field.modulus)
        bundles = [
            ShareBundle.from_wire(int(tokens[i]), tokens[i + 1]) for i in range(0, len(tokens), 2)
        ]
        return self.combine_bundles(bundles)

    def combine_bundles(self, bundles: Sequence[ShareBundle]) -> str:
        if len(bundles) < 2:
            raise ShareValidationError("Must combine at least two shares.")
        chunk_count = len(bundles[0].values)
        if any(len(bundle.values) != chunk_count for bundle in bundles):
            raise ShareValidationError(
                "Each share must contain the same number of subsecrets (numbers separated by '+')."
            )
        validate_share_numbers((bundle.x for bundle in bundles), self.field.modulus)

        puzzles = [
            ({bundle.x: bundle.values[index] for bundle in bundles},) for index in range(chunk_count)
        ]
        logger.info("combine.start", chunks=chunk_count, shares=len(bundles))
        pieces = self._fan_out(_combine_chunk, puzzles)
        logger.info("combine.done", chunks=len(pieces))
        return join_chunks(pieces)

    def _fan_out(self, worker: Callable[..., Tuple[int, Any]], jobs: Sequence[tuple]) -> List[Any]:
        if not jobs:
            return []
        results: List[Optional[Any]] = [None] * len(jobs)
        workers = self._max_workers or min(len(jobs), os.cpu_count() or 1)
        pool: Executor
        with self._executor_cls(max_workers=workers) as pool:
            futures = [pool.submit(worker, self.field, index, *args) for index, args in enumerate(jobs)]
            for future in as_completed(futures):
                index, value = future.result()
                results[index] = value
        return results


__all__ = ["ShareOrchestrator"]
