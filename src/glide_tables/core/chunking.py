# src/glide_tables/core/chunking.py
"""Chunked dispatch of row mutations.

Splits a row sequence into chunks of at most ``chunk_size`` rows and hands
each chunk to an async sink (one request per chunk). Results are collected
into per-chunk slots and concatenated in chunk order, so the returned
sequence always lines up with the input rows whatever order the chunks
complete in.

Failure policy:
    The first failing chunk aborts the dispatch. No later chunk is started
    after a failure is observed, and chunks already committed server-side are
    not rolled back. A failure before any chunk completed propagates
    unchanged; a failure after at least one chunk completed is raised as
    PartialBatchFailure chained to the original error.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

import structlog

from glide_tables.contracts.errors import PartialBatchFailure

logger = structlog.get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def chunked(items: Sequence[T], size: int) -> list[Sequence[T]]:
    """Split items into contiguous chunks of at most ``size`` elements.

    Raises:
        ValueError: If size < 1
    """
    if size < 1:
        raise ValueError(f"chunk size must be >= 1, got {size}")
    return [items[start : start + size] for start in range(0, len(items), size)]


async def dispatch_chunks(
    rows: Sequence[T],
    chunk_size: int,
    sink: Callable[[Sequence[T]], Awaitable[Sequence[R]]],
    *,
    max_concurrency: int = 1,
) -> list[R]:
    """Dispatch rows to ``sink`` one chunk at a time and concatenate the results.

    Args:
        rows: Rows to dispatch, in order
        chunk_size: Maximum rows per sink call
        sink: Async callable performing one request per chunk
        max_concurrency: Chunks allowed in flight at once (1 = sequential)

    Returns:
        Concatenation of every chunk's results, in input order

    Raises:
        ValueError: If chunk_size or max_concurrency < 1
        PartialBatchFailure: If a chunk fails after another chunk completed
        Exception: Whatever the sink raised, if nothing had completed yet
    """
    if max_concurrency < 1:
        raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")

    chunks = chunked(rows, chunk_size)
    if max_concurrency == 1 or len(chunks) <= 1:
        per_chunk = await _dispatch_sequential(chunks, sink)
    else:
        per_chunk = await _dispatch_concurrent(chunks, sink, max_concurrency)

    return [item for chunk_result in per_chunk for item in chunk_result]


async def _dispatch_sequential(
    chunks: list[Sequence[T]],
    sink: Callable[[Sequence[T]], Awaitable[Sequence[R]]],
) -> list[list[R]]:
    results: list[list[R]] = []
    for index, chunk in enumerate(chunks):
        try:
            results.append(list(await sink(chunk)))
        except Exception as exc:
            _log_failure(exc, chunk_index=index, chunk_count=len(chunks), chunks_completed=index)
            if index == 0:
                raise
            raise PartialBatchFailure(
                chunk_index=index,
                chunk_count=len(chunks),
                chunks_completed=index,
                cause=exc,
            ) from exc
    return results


async def _dispatch_concurrent(
    chunks: list[Sequence[T]],
    sink: Callable[[Sequence[T]], Awaitable[Sequence[R]]],
    max_concurrency: int,
) -> list[list[R]]:
    slots: list[list[R]] = [[] for _ in chunks]
    semaphore = asyncio.Semaphore(max_concurrency)
    completed = 0
    # (chunk_index, error, chunks_completed) of the first failure
    failure: tuple[int, Exception, int] | None = None

    async def run(index: int, chunk: Sequence[T]) -> None:
        nonlocal completed, failure
        async with semaphore:
            # A waiter can be woken by the failing chunk's release before
            # the task group cancels it.
            if failure is not None:
                return
            try:
                slots[index] = list(await sink(chunk))
            except Exception as exc:
                if failure is None:
                    failure = (index, exc, completed)
                raise
            completed += 1

    try:
        async with asyncio.TaskGroup() as group:
            for index, chunk in enumerate(chunks):
                group.create_task(run(index, chunk))
    except ExceptionGroup:
        if failure is None:
            raise
        index, exc, done = failure
        _log_failure(exc, chunk_index=index, chunk_count=len(chunks), chunks_completed=done)
        if done == 0:
            raise exc
        raise PartialBatchFailure(
            chunk_index=index,
            chunk_count=len(chunks),
            chunks_completed=done,
            cause=exc,
        ) from exc

    return slots


def _log_failure(exc: Exception, *, chunk_index: int, chunk_count: int, chunks_completed: int) -> None:
    logger.error(
        "chunk_dispatch_failed",
        chunk_index=chunk_index,
        chunk_count=chunk_count,
        chunks_completed=chunks_completed,
        error=str(exc),
        error_type=type(exc).__name__,
    )
