"""Pydantic models for configuration and tool inputs."""

from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from file_excluder_mcp.constants import PlatformConvention, ResponseFormat

# Paths and patterns are compared verbatim, surrounding whitespace included
RawStr = Annotated[str, StringConstraints(strip_whitespace=False)]


class ExcluderConfig(BaseModel):
    """Contents of a .file-excluder.yml project configuration."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra='forbid'
    )

    exclude: List[RawStr] = Field(
        default_factory=list,
        description="Exclude patterns in evaluation order (e.g., 'vendor', '/etc/app/', 'C:/temp/*')"
    )
    legacy_implicit_wildcard: bool = Field(
        default=True,
        description="Treat literal patterns as if followed by a wildcard (pre-fix behavior)"
    )
    convention: Optional[PlatformConvention] = Field(
        default=None,
        description="Path convention: 'windows' or 'posix'. Host convention if not specified"
    )


class CheckPathsInput(BaseModel):
    """Input for checking paths against exclude patterns."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra='forbid'
    )

    paths: List[RawStr] = Field(
        ...,
        description="File paths to check (e.g., '/repo/src/app.php', 'C:\\repo\\src\\app.php')",
        min_length=1,
        max_length=1000
    )
    project_path: Optional[str] = Field(
        default=None,
        description="Project root holding .file-excluder.yml. Its patterns are used first if present"
    )
    exclude_patterns: Optional[List[RawStr]] = Field(
        default=None,
        description="Additional exclude patterns, evaluated after the configured ones"
    )
    legacy_implicit_wildcard: Optional[bool] = Field(
        default=None,
        description="Override the configured matching mode. Defaults to the config value, or legacy if none"
    )
    convention: Optional[PlatformConvention] = Field(
        default=None,
        description="Override the configured path convention"
    )
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown' for human-readable or 'json' for machine-readable"
    )

    @field_validator('paths')
    @classmethod
    def validate_paths(cls, value: List[str]) -> List[str]:
        if any(not path.strip() for path in value):
            raise ValueError("Paths must be non-empty strings")
        return value


class InitializeConfigInput(BaseModel):
    """Input for initializing .file-excluder.yml configuration."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra='forbid'
    )

    project_path: str = Field(
        ...,
        description="Absolute path to project root directory (e.g., '/home/user/my-project', 'C:\\Users\\user\\project')",
        min_length=1
    )
    exclude_patterns: List[RawStr] = Field(
        default_factory=list,
        description="Exclude patterns to store in the configuration",
        max_length=200
    )
    legacy_implicit_wildcard: bool = Field(
        default=True,
        description="Store legacy (implicit wildcard) matching mode"
    )
    convention: Optional[PlatformConvention] = Field(
        default=None,
        description="Path convention to store. Omitted means the host convention at load time"
    )
