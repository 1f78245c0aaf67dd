"""
Pydantic models for crossshell configuration.
"""

import codecs
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExecutionSettings(BaseModel):
    """Default execution policy and output decoding."""

    stream: bool = Field(
        default=True,
        description="Write output lines to the console as they arrive",
    )
    treat_stderr_as_failure: bool = Field(
        default=False,
        description="Fail the command when anything is written to stderr",
    )
    encoding: str = Field(
        default="utf-8",
        description="Encoding used to decode child output",
    )
    stderr_prefix: str = Field(
        default="ERR: ",
        description="Prefix for streamed stderr lines",
    )

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Reject encodings the codec registry does not know."""
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {v}") from e
        return v


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        description="Logging level",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional log file path",
    )


class CrossShellConfig(BaseModel):
    """
    Main configuration container.

    Loaded from YAML files and environment variables, then handed to the
    runner factory.
    """

    execution: ExecutionSettings = Field(default_factory=ExecutionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Allow extra fields to be ignored (forward compatibility)
    model_config = ConfigDict(extra="ignore")
