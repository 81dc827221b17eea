"""Bounded-concurrency execution of file pipelines."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
import logging
from pathlib import Path

from .core import Outcome, RunSummary
from .pipeline import FilePipeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Progress:
    """Notification emitted once per completed file."""

    source: Path
    outcome: Outcome
    completed: int
    total: int


ProgressCallback = Callable[[Progress], None]


class Scheduler:
    """Runs a pipeline over many files with at most N in flight.

    A fixed pool of worker coroutines drains a queue of paths. Completion
    order, and therefore progress order, is not the input order.
    """

    def __init__(
        self,
        pipeline: FilePipeline,
        concurrency: int,
        on_progress: ProgressCallback | None = None,
    ):
        if concurrency < 1:
            raise ValueError(
                f"Concurrency must be a positive integer, got {concurrency}"
            )
        self.pipeline = pipeline
        self.concurrency = concurrency
        self.on_progress = on_progress

    async def run(self, image_paths: list[Path]) -> RunSummary:
        """Process every path exactly once and return the counters."""
        summary = RunSummary(total=len(image_paths))
        queue: asyncio.Queue[Path] = asyncio.Queue()
        for image_path in image_paths:
            queue.put_nowait(image_path)

        worker_count = min(self.concurrency, len(image_paths))
        logger.debug(
            "Processing %d file(s) with %d worker(s)", len(image_paths), worker_count
        )
        workers = [
            asyncio.create_task(self._worker(queue, summary))
            for _ in range(worker_count)
        ]
        await asyncio.gather(*workers)
        return summary

    async def _worker(self, queue: asyncio.Queue, summary: RunSummary) -> None:
        while True:
            try:
                image_path = queue.get_nowait()
            except asyncio.QueueEmpty:
                return

            outcome = await self.pipeline.run(image_path)
            summary.record(outcome)
            self._notify(
                Progress(
                    source=image_path,
                    outcome=outcome,
                    completed=summary.processed,
                    total=summary.total,
                )
            )

    def _notify(self, progress: Progress) -> None:
        if self.on_progress is None:
            return
        try:
            self.on_progress(progress)
        except Exception:
            logger.exception("Progress callback failed for %s", progress.source)
