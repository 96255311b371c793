"""Base error type for di-container.

Every error carries an ``ErrorContext``: where it was raised, the details
that identify the failing service or setting, and suggestions for the user.
The CLI renders the context with ``format_for_cli``.
"""

from __future__ import annotations

import re
import sys
import traceback
from datetime import datetime
from pathlib import Path
from types import FrameType
from typing import Any, Dict, List, Optional, Type, TypeVar

from loguru import logger
from pydantic import BaseModel, Field
from rich.markup import escape

_ERRORS_PACKAGE = Path(__file__).resolve().parent


class ErrorOrigin(BaseModel):
    """Code location an error was raised from."""

    module: str
    function: str
    line_number: int

    @classmethod
    def from_frame(cls, frame: FrameType, line_number: int) -> "ErrorOrigin":
        return cls(
            module=frame.f_globals.get("__name__", "?"),
            function=frame.f_code.co_name,
            line_number=line_number,
        )

    def __str__(self) -> str:
        return f"{self.module}.{self.function}:{self.line_number}"


class ErrorCause(BaseModel):
    """Summary of the exception an error wraps."""

    type: str
    message: str


class ErrorContext(BaseModel):
    """Details collected for an error while it is being raised."""

    timestamp: datetime = Field(default_factory=datetime.now)
    origin: Optional[ErrorOrigin] = None
    details: Dict[str, Any] = Field(default_factory=dict)
    suggestions: List[str] = Field(default_factory=list)
    cause: Optional[ErrorCause] = None

    @classmethod
    def at_raise_site(cls) -> "ErrorContext":
        """Create context pointing at the first caller outside the errors package."""
        frame = sys._getframe(1)
        while frame is not None:
            if Path(frame.f_code.co_filename).resolve().parent != _ERRORS_PACKAGE:
                return cls(origin=ErrorOrigin.from_frame(frame, frame.f_lineno))
            frame = frame.f_back
        return cls()

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorContext":
        """Create context pointing at the innermost frame of ``exc``'s traceback."""
        frames = list(traceback.walk_tb(exc.__traceback__))
        if not frames:
            return cls.at_raise_site()
        frame, line_number = frames[-1]
        return cls(origin=ErrorOrigin.from_frame(frame, line_number))

    def add_detail(self, key: str, value: Any) -> None:
        self.details[key] = value

    def add_suggestion(self, suggestion: str) -> None:
        self.suggestions.append(suggestion)


T = TypeVar("T", bound="ContainerError")


class ContainerError(Exception):
    """Base exception of di-container.

    Args:
        message: Human-readable error message
        context: Context to attach, captured at the raise site if omitted
        cause: Exception this error wraps
        error_code: Code for programmatic handling, derived from the class name if omitted
        recoverable: Whether the caller can carry on after this error
    """

    def __init__(
        self,
        message: str,
        *,
        context: Optional[ErrorContext] = None,
        cause: Optional[BaseException] = None,
        error_code: Optional[str] = None,
        recoverable: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext.at_raise_site()
        self.cause = cause
        self.error_code = error_code or self._generate_error_code()
        self.recoverable = recoverable

        if cause is not None:
            self.__cause__ = cause
            self.context.cause = ErrorCause(type=type(cause).__name__, message=str(cause))

        self._log_error()

    def _generate_error_code(self) -> str:
        # NotRegisteredError -> NOT_REGISTERED
        code = re.sub(r"(?<=[a-z])(?=[A-Z])", "_", type(self).__name__).upper()
        return code[: -len("_ERROR")] if code.endswith("_ERROR") else code

    def _log_error(self) -> None:
        bound = logger.bind(error_code=self.error_code, origin=str(self.context.origin))
        # Message is logged verbatim, never run through str.format
        if self.recoverable:
            bound.error(self.message)
        else:
            bound.critical(self.message)

    @classmethod
    def from_exception(
        cls: Type[T],
        exc: BaseException,
        message: Optional[str] = None,
        **kwargs: Any,
    ) -> T:
        """Wrap ``exc``, locating the error where ``exc`` was raised."""
        return cls(message or str(exc), context=ErrorContext.from_exception(exc), cause=exc, **kwargs)

    def with_context(self: T, **kwargs: Any) -> T:
        """Attach details identifying what failed."""
        for key, value in kwargs.items():
            self.context.add_detail(key, value)
        return self

    def with_suggestion(self: T, suggestion: str) -> T:
        self.context.add_suggestion(suggestion)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for logs or machine-readable output."""
        return {
            "error_type": type(self).__name__,
            "error_code": self.error_code,
            "message": self.message,
            "recoverable": self.recoverable,
            "context": self.context.model_dump(mode="json"),
        }

    def format_for_cli(self, verbose: bool = False) -> str:
        """Render as rich markup; ``verbose`` adds the origin, details and cause."""
        lines = [
            f"[red]Error[/red]: {escape(self.message)}",
            f"[dim]Code: {self.error_code}[/dim]",
        ]

        if self.context.suggestions:
            lines.append("\n[yellow]Suggestions:[/yellow]")
            lines.extend(f"  • {escape(suggestion)}" for suggestion in self.context.suggestions)

        if verbose:
            if self.context.origin is not None:
                lines.append(f"\n[dim]Raised at:[/dim] {escape(str(self.context.origin))}")
            if self.context.details:
                lines.append("\n[dim]Details:[/dim]")
                for key, value in self.context.details.items():
                    lines.append(f"  {key}: {escape(str(value))}")
            if self.context.cause is not None:
                lines.append(
                    f"\n[dim]Caused by:[/dim] {self.context.cause.type}: {escape(self.context.cause.message)}"
                )

        return "\n".join(lines)
