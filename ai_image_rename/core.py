"""
Core types, interfaces and errors for the AI image rename tool.
"""

from abc import ABC, abstractmethod
import ast
from dataclasses import dataclass, field
from enum import Enum
import json
from pathlib import Path
from typing import Any

import yaml

from .constants import (
    CASE_CAMEL,
    CASE_CAPITAL,
    CASE_KEBAB,
    CASE_LOWERCASE,
    CASE_PASCAL,
    CASE_SENTENCE,
    CASE_SNAKE,
    DEFAULT_CASE,
    DEFAULT_CONCURRENCY,
)


class CasingFormat(Enum):
    """Supported filename casing conventions."""

    SNAKE = CASE_SNAKE
    KEBAB = CASE_KEBAB
    PASCAL = CASE_PASCAL
    CAMEL = CASE_CAMEL
    CAPITAL = CASE_CAPITAL
    LOWERCASE = CASE_LOWERCASE
    SENTENCE = CASE_SENTENCE


class OutcomeStatus(Enum):
    """Terminal status of one file."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    ERROR = "error"


class ImageRenameError(Exception):
    """Base class for file-scoped failures."""


class ReadError(ImageRenameError):
    """The source image could not be read."""


class DescribeError(ImageRenameError):
    """The description service failed or returned nothing usable."""


class RenameError(ImageRenameError):
    """The filesystem rename call failed."""


@dataclass(frozen=True)
class EncodedImage:
    """Image bytes prepared for transport."""

    media_type: str
    data: str

    @property
    def data_url(self) -> str:
        return f"data:{self.media_type};base64,{self.data}"


@dataclass(frozen=True)
class Outcome:
    """Result of running one file through the pipeline."""

    status: OutcomeStatus
    new_path: Path | None = None
    detail: str = ""

    @classmethod
    def success(cls, new_path: Path) -> "Outcome":
        return cls(OutcomeStatus.SUCCESS, new_path=new_path)

    @classmethod
    def skipped(cls, reason: str) -> "Outcome":
        return cls(OutcomeStatus.SKIPPED, detail=reason)

    @classmethod
    def error(cls, message: str) -> "Outcome":
        return cls(OutcomeStatus.ERROR, detail=message)


@dataclass
class RunSummary:
    """Outcome counters for one run."""

    total: int
    success: int = 0
    skipped: int = 0
    error: int = 0
    processed: int = 0

    def record(self, outcome: Outcome) -> None:
        """Count one completed file."""
        if outcome.status is OutcomeStatus.SUCCESS:
            self.success += 1
        elif outcome.status is OutcomeStatus.SKIPPED:
            self.skipped += 1
        else:
            self.error += 1
        self.processed += 1


@dataclass
class Config:
    """Configuration for the AI image rename tool."""

    naming: dict[str, Any] = field(default_factory=dict)
    processing: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_file(cls, config_path: str) -> "Config":
        """Load configuration from YAML file."""
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        return cls(
            naming=data.get("naming") or {},
            processing=data.get("processing") or {},
        )

    @property
    def default_format(self) -> CasingFormat:
        try:
            return CasingFormat(self.naming.get("default_format", DEFAULT_CASE))
        except ValueError:
            return CasingFormat(DEFAULT_CASE)

    @property
    def max_concurrency(self) -> int:
        try:
            value = int(self.processing.get("max_concurrency", DEFAULT_CONCURRENCY))
        except (TypeError, ValueError):
            return DEFAULT_CONCURRENCY
        return value if value >= 1 else DEFAULT_CONCURRENCY


class DescriptionClient(ABC):
    """Base class for image description backends."""

    @abstractmethod
    async def describe(self, image: EncodedImage) -> str:
        """Return a short description of the image or raise DescribeError."""
        pass


class CaseFormatter(ABC):
    """Base class for case formatters."""

    @abstractmethod
    def format(self, text: str, casing: CasingFormat) -> str:
        """Format text according to casing."""
        pass


def format_api_error(error: Exception) -> str:
    """Format API errors in a readable way using rich."""
    error_str = str(error)

    # Try to extract and pretty-print JSON from the error
    if "{" in error_str and "error" in error_str:
        try:
            json_start = error_str.find("{")
            json_part = error_str[json_start:]

            # Parse the Python literal (handles single quotes, None, etc.)
            try:
                error_data = ast.literal_eval(json_part)
            except (ValueError, SyntaxError):
                json_part = json_part.replace("'", '"').replace("None", "null")
                error_data = json.loads(json_part)

            from rich.console import Console

            console = Console()
            with console.capture() as capture:
                console.print_json(json.dumps(error_data))
            pretty_json = capture.get()
            error_str = error_str[:json_start] + "\n" + pretty_json

        except (json.JSONDecodeError, ValueError, SyntaxError, TypeError):
            # If all parsing fails, return original error
            pass

    return error_str
