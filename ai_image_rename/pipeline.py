"""Per-file processing: encode, describe, transform, rename."""

from collections.abc import Callable
from enum import Enum
import logging
from pathlib import Path

from .core import (
    CaseFormatter,
    CasingFormat,
    DescribeError,
    DescriptionClient,
    Outcome,
    OutcomeStatus,
    ReadError,
    RenameError,
)
from .encoder import encode_image_async
from .naming import CaseFormatterImpl
from .safety import RenameCoordinator

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    """States one file moves through."""

    PENDING = "pending"
    ENCODING = "encoding"
    DESCRIBING = "describing"
    TRANSFORMING = "transforming"
    RENAMING = "renaming"
    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


TERMINAL_STATES = {
    OutcomeStatus.SUCCESS: PipelineState.SUCCEEDED,
    OutcomeStatus.SKIPPED: PipelineState.SKIPPED,
    OutcomeStatus.ERROR: PipelineState.FAILED,
}

StateListener = Callable[[Path, PipelineState], None]


class FilePipeline:
    """Runs a single image through the rename state machine.

    ``run`` always returns an Outcome. Failures of any kind are mapped to
    an error outcome so that one bad file cannot stop the batch.
    """

    def __init__(
        self,
        describer: DescriptionClient,
        casing: CasingFormat,
        coordinator: RenameCoordinator | None = None,
        formatter: CaseFormatter | None = None,
        state_listener: StateListener | None = None,
    ):
        self.describer = describer
        self.casing = casing
        self.coordinator = coordinator or RenameCoordinator()
        self.formatter = formatter or CaseFormatterImpl()
        self.state_listener = state_listener

    async def run(self, image_path: Path) -> Outcome:
        """Process one admitted image and classify the result."""
        try:
            self._enter(image_path, PipelineState.PENDING)
            outcome = await self._process(image_path)
        except Exception as e:
            logger.exception("Unexpected failure processing %s", image_path)
            outcome = Outcome.error(f"Unexpected error: {e}")

        if outcome.detail:
            logger.debug("%s: %s", image_path.name, outcome.detail)
        self._finish(image_path, outcome)
        return outcome

    async def _process(self, image_path: Path) -> Outcome:
        self._enter(image_path, PipelineState.ENCODING)
        try:
            image = await encode_image_async(image_path)
        except ReadError as e:
            return Outcome.error(str(e))

        self._enter(image_path, PipelineState.DESCRIBING)
        try:
            description = await self.describer.describe(image)
        except DescribeError as e:
            return Outcome.error(str(e))

        description = (description or "").strip()
        if not description:
            return Outcome.skipped("empty description")

        self._enter(image_path, PipelineState.TRANSFORMING)
        new_name = self.formatter.format(description, self.casing)
        if not new_name:
            return Outcome.skipped("description produced an empty name")

        destination = image_path.parent / f"{new_name}{image_path.suffix}"
        if str(destination) == str(image_path):
            return Outcome.skipped("name unchanged")

        self._enter(image_path, PipelineState.RENAMING)
        try:
            renamed = await self.coordinator.try_rename(image_path, destination)
        except RenameError as e:
            return Outcome.error(str(e))

        if not renamed:
            return Outcome.skipped(f"{destination.name} already exists")
        return Outcome.success(destination)

    def _enter(self, image_path: Path, state: PipelineState) -> None:
        logger.debug("%s: %s", image_path.name, state.value)
        if self.state_listener is not None:
            self.state_listener(image_path, state)

    def _finish(self, image_path: Path, outcome: Outcome) -> None:
        try:
            self._enter(image_path, TERMINAL_STATES[outcome.status])
        except Exception:
            logger.exception("State listener failed for %s", image_path)
