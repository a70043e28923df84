"""
Base Service Interface

Every pipeline stage (indicators, signals, prediction, universe,
evaluation) is a service turning one contract into the next.
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseService(ABC, Generic[InputT, OutputT]):
    """
    Base class for all pipeline stages.

    Each stage:
    - Consumes one contract (InputT)
    - Produces the next one (OutputT)
    - Reports whether it can run
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name for logging and error attribution."""
        pass

    @abstractmethod
    async def execute(self, input_data: InputT) -> OutputT:
        """
        Run the stage.

        Args:
            input_data: Contract consumed by this stage

        Returns:
            Contract produced by this stage

        Raises:
            ServiceError: Only for invalid arguments or upstream failures,
                never for short price histories
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the stage and its collaborators are usable."""
        pass

    async def validate_input(self, input_data: InputT) -> InputT:
        """
        Validate input data.
        Default returns input as-is (pydantic contracts validate on construction).
        """
        return input_data

    def __repr__(self) -> str:
        return f"<{self.name}>"


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, service_name: str, message: str, details: Optional[dict] = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")

    def to_dict(self) -> dict:
        """Flat, log-friendly view of the error."""
        return {"service": self.service_name, "message": self.message, **self.details}


class ValidationError(ServiceError):
    """Caller passed an invalid argument."""
    pass


class ExternalAPIError(ServiceError):
    """Price data provider call failed."""
    pass
