"""Pydantic v2 schema for the structured post returned by the model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class FormattedPost(BaseModel):
    """A discovered item rewritten into a publishable post."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    unique_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    content_html: str = Field(min_length=1)
    source: str = ""
    source_link: str = ""

    @field_validator("unique_id", mode="before")
    @classmethod
    def _coerce_unique_id(cls, value: object) -> object:
        # the model sometimes returns numeric ids
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("source", "source_link", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return "" if value is None else value


def validate_output(data: object) -> tuple[FormattedPost | None, list[str]]:
    """Parse a decoded model reply into a FormattedPost.

    Returns ``(post, [])`` when valid, ``(None, errors)`` otherwise.
    """
    if not isinstance(data, dict):
        return None, [f"expected a JSON object, got {type(data).__name__}"]
    try:
        return FormattedPost.model_validate(data), []
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(p) for p in err['loc']) or 'root'}: {err['msg']}"
            for err in exc.errors()
        ]
        return None, errors
