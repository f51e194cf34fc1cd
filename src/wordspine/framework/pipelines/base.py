"""Base pipeline interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from wordspine.core.result import Result


class PipelineStatus(str, Enum):
    """Pipeline execution status."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class Pipeline(ABC):
    """Base class for all pipelines."""

    # Pipeline metadata
    name: str = ""
    description: str = ""

    def __init__(self) -> None:
        self.status = PipelineStatus.PENDING

    @abstractmethod
    def run(self) -> Result[Any]:
        """Execute the pipeline. Must be implemented by subclasses."""
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, status={self.status.value})"
