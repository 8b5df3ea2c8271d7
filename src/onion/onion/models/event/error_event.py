# ABOUTME: ErrorEvent model broadcast on the application's error-notification channel
# ABOUTME: Carries the error, the originating request context and propagation state

from datetime import datetime, UTC
from typing import Any, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class ErrorEvent(BaseModel):
    """
    Represents an otherwise-unhandled error reported by the application.

    Subscribers receive the event in subscription order. Any subscriber may
    call `stop_propagation()` to prevent later subscribers and the default
    error handler from seeing it.
    """

    id: str = Field(default_factory=lambda: str(uuid4()), description="Unique event identifier")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC), description="Event creation timestamp")
    error: BaseException = Field(description="The reported error")
    context: Optional[Any] = Field(default=None, description="Request context the error belongs to, if any")

    model_config = ConfigDict(arbitrary_types_allowed=True)

    _propagation_stopped: bool = PrivateAttr(default=False)

    @property
    def status(self) -> int | None:
        """HTTP status carried by the error, if any."""
        return getattr(self.error, "status", None)

    @property
    def propagation_stopped(self) -> bool:
        return self._propagation_stopped

    def stop_propagation(self) -> None:
        """Prevent remaining subscribers and the default handler from running."""
        self._propagation_stopped = True
