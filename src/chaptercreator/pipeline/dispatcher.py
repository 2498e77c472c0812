"""Parallel batch runner: groups segments by item and writes chapter files."""

from __future__ import annotations

import threading
from collections import Counter
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from chaptercreator.chapters.writer import ChapterWriteError
from chaptercreator.models.config import BatchPolicy
from chaptercreator.models.segment import Segment
from chaptercreator.pipeline.manager import ChapterManager, ItemOutcome
from chaptercreator.utils.progress import log_error, log_step, log_warning

ProgressSink = Callable[[int], None]


@dataclass
class BatchResult:
    """Per-item outcomes of a batch run."""

    total: int = 0
    outcomes: dict[str, ItemOutcome] = field(default_factory=dict)

    @property
    def counts(self) -> Counter:
        return Counter(outcome.value for outcome in self.outcomes.values())

    @property
    def written(self) -> int:
        return self.counts[ItemOutcome.WRITTEN.value]

    @property
    def failed(self) -> int:
        return self.counts[ItemOutcome.FAILED.value]

    @property
    def cancelled(self) -> int:
        return self.counts[ItemOutcome.CANCELLED.value]

    @property
    def processed(self) -> int:
        return len(self.outcomes) - self.cancelled


def group_segments(segments: Iterable[Segment]) -> dict[str, list[Segment]]:
    """Group segments by item id, each group stable-sorted by start time."""
    groups: dict[str, list[Segment]] = {}
    for segment in segments:
        groups.setdefault(segment.item_id, []).append(segment)
    for group in groups.values():
        group.sort(key=lambda s: s.start_ticks)
    return groups


class BatchDispatcher:
    """Runs ChapterManager over many items with bounded parallelism.

    Cancellation is checked once per item before it starts; items already
    running are allowed to finish.
    """

    def __init__(self, manager: ChapterManager, policy: BatchPolicy | None = None) -> None:
        self.manager = manager
        self.policy = policy or manager.config.batch

    def run(
        self,
        segments: Iterable[Segment],
        *,
        force_overwrite: bool = False,
        cancel: threading.Event | None = None,
        progress: ProgressSink | None = None,
    ) -> BatchResult:
        groups = group_segments(segments)
        total = len(groups)
        result = BatchResult(total=total)
        if total == 0:
            return result

        cancel = cancel or threading.Event()
        overwrite = self.policy.overwrite_existing or force_overwrite
        lock = threading.Lock()
        processed = 0

        self.manager.log_configuration()
        log_step(
            "Batch",
            f"Creating chapters for {total} item(s) "
            f"with {self.policy.max_parallelism} worker(s)",
        )

        def process(item_id: str, group: list[Segment]) -> None:
            nonlocal processed
            if cancel.is_set():
                with lock:
                    result.outcomes[item_id] = ItemOutcome.CANCELLED
                return

            try:
                outcome = self.manager.update_chapter_file(
                    item_id,
                    group,
                    force_overwrite=force_overwrite,
                    overwrite=overwrite,
                )
            except ChapterWriteError:
                # Already logged by the manager
                outcome = ItemOutcome.FAILED
            except Exception as e:
                log_error(f"Unexpected error for {item_id}: {e}")
                outcome = ItemOutcome.FAILED

            with lock:
                processed += 1
                result.outcomes[item_id] = outcome
                if progress is not None:
                    try:
                        progress(processed * 100 // total)
                    except Exception as e:
                        log_error(f"Progress report failed after {item_id}: {e}")

        with ThreadPoolExecutor(
            max_workers=self.policy.max_parallelism,
            thread_name_prefix="chapters",
        ) as executor:
            futures = [
                executor.submit(process, item_id, group)
                for item_id, group in groups.items()
            ]
            for future in futures:
                future.result()

        if result.cancelled:
            log_warning(
                f"Batch cancelled: {result.processed}/{total} item(s) processed, "
                f"{result.cancelled} not started"
            )
        return result
