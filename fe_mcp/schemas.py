"""Input validation models for fe-mcp tools."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

ArgsT = TypeVar("ArgsT", bound="ToolArgs")


class ToolArgs(BaseModel):
    """Base for tool argument models. Unknown keys are dropped, types are strict."""

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)


class FileReadArgs(ToolArgs):
    path: str = Field(min_length=1, description="Path to the file to read")


class FileWriteArgs(ToolArgs):
    path: str = Field(min_length=1, description="Path to the file to write")
    content: str = Field(description="Content to write to the file")


class ListDirectoryArgs(ToolArgs):
    path: str = Field(min_length=1, description="Path to the directory to list")


class ArgsValidationError(ValueError):
    """Raised when tool arguments do not match the declared shape."""

    def __init__(self, errors: list[dict[str, Any]]):
        self.errors = errors
        super().__init__(format_errors(errors))


def format_errors(errors: list[dict[str, Any]]) -> str:
    """Render pydantic error dicts as `field: message` pairs."""
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ())) or "arguments"
        msg = err.get("msg", "invalid value")
        if loc == "path" and err.get("type") == "string_too_short":
            msg = "Path cannot be empty"
        parts.append(f"{loc}: {msg}")
    return "; ".join(parts)


def validate_args(model: type[ArgsT], payload: Any) -> ArgsT:
    """
    Validate an untyped payload against a tool argument model.

    Args:
        model: ToolArgs subclass bound to the tool
        payload: Raw `arguments` from the request (None means no arguments)

    Returns:
        Validated, immutable model instance

    Raises:
        ArgsValidationError: If a field is missing, has the wrong type, or
            violates a constraint. The message names the field.
    """
    if payload is None:
        payload = {}
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise ArgsValidationError(e.errors()) from e
