from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from parse.console_calls import DEFAULT_LOGGER_OBJECT, DEFAULT_METHODS

DirectivePathMatch = Literal["suffix", "glob"]

DEFAULT_HIGHLIGHT_STYLE = (
    "padding:2px 4px;background:#1e80ff;color:#fff;border-radius:3px"
)


class ConfigError(Exception):
    """Raised when transform options cannot be validated."""


class TransformOptions(BaseModel):
    """Formatting configuration for injected log metadata."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    logger_object: str = Field(
        default=DEFAULT_LOGGER_OBJECT,
        description="Object whose methods are treated as logging calls",
    )
    methods: list[str] = Field(
        default_factory=lambda: list(DEFAULT_METHODS),
        description="Method names on the logger object to rewrite",
    )
    show_file: bool = Field(default=True, description="Render the file label")
    show_line: bool = Field(default=True, description="Render the line number")
    show_column: bool = Field(
        default=True,
        description="Render the column (only together with the line)",
    )
    show_args: bool = Field(
        default=True,
        description="Echo the argument source unless it starts with a literal",
    )
    prefix: str = Field(default="", description="Text placed before the location")
    suffix: str = Field(
        default="",
        description="Text appended as an extra trailing string argument",
    )
    arg_type_tag: bool = Field(
        default=False,
        description="Append the first argument's syntactic kind as a string",
    )
    highlight: bool = Field(
        default=False,
        description="Render the location as a %c styled label",
    )
    highlight_style: str = Field(
        default=DEFAULT_HIGHLIGHT_STYLE,
        description="CSS applied to the highlighted label",
    )
    launch_editor: bool = Field(
        default=False,
        description="Add a localhost URL that opens the call site in an editor",
    )
    port: int = Field(
        default=3070,
        ge=1,
        le=65535,
        description="Port of the launch-editor server",
    )
    root: str | None = Field(
        default=None,
        description="Project root used to shorten launch-editor paths",
    )
    extended_path_file_names: list[str] = Field(
        default_factory=lambda: ["index"],
        description="File stems rendered together with their parent directory",
    )
    directive_path_match: DirectivePathMatch = Field(
        default="suffix",
        description="How path qualifiers on suppression directives are matched",
    )
    include_content: bool = Field(
        default=False,
        description="Embed the original text as sourcesContent in the map",
    )

    @field_validator("methods")
    @classmethod
    def validate_methods(cls, v: list[str]) -> list[str]:
        """Require at least one method and only identifier-shaped names."""
        if not v:
            msg = "methods must name at least one logging method"
            raise ValueError(msg)
        for name in v:
            if not name.isidentifier():
                msg = f"Invalid method name '{name}'"
                raise ValueError(msg)
        return v

    @field_validator("logger_object")
    @classmethod
    def validate_logger_object(cls, v: str) -> str:
        if not v.isidentifier():
            msg = f"Invalid logger object '{v}'"
            raise ValueError(msg)
        return v

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> TransformOptions:
        """Validate plain options handed over by the host build tool."""
        if data is None:
            return cls()

        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            msg = f"Invalid transform options: {e}"
            raise ConfigError(msg) from e


def coerce_options(
    options: TransformOptions | Mapping[str, Any] | None,
) -> TransformOptions:
    if isinstance(options, TransformOptions):
        return options
    return TransformOptions.from_mapping(options)


__all__ = [
    "ConfigError",
    "DEFAULT_HIGHLIGHT_STYLE",
    "DirectivePathMatch",
    "TransformOptions",
    "coerce_options",
]
