#!/usr/bin/env python3
"""
File Excluder MCP Server

An MCP server exposing analysis exclude-pattern filtering:
- Checking file paths against exclude patterns (wildcard and literal)
- Windows and POSIX path conventions
- Legacy (implicit wildcard) and strict literal matching
- Project configuration via .file-excluder.yml
"""

import json
import logging
import os
import sys
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from file_excluder_mcp.constants import (
    CHARACTER_LIMIT,
    CONFIG_FILENAME,
    LOG_LEVEL_ENV,
    PlatformConvention,
    ResponseFormat,
)
from file_excluder_mcp.core import PathExclusionFilter, build_exclusion_filter
from file_excluder_mcp.models import CheckPathsInput, ExcluderConfig, InitializeConfigInput
from file_excluder_mcp.utils import config_path, handle_error, save_config

logger = logging.getLogger(__name__)

# Initialize the MCP server
mcp = FastMCP("file_excluder_mcp")


def _describe_mode(legacy_implicit_wildcard: bool) -> str:
    return "legacy (implicit wildcard)" if legacy_implicit_wildcard else "strict"


def _truncate(text: str) -> str:
    if len(text) <= CHARACTER_LIMIT:
        return text
    return text[:CHARACTER_LIMIT] + "\n\n... (response truncated)"


# ============================================================================
# Tool Implementations
# ============================================================================

@mcp.tool(
    name="excluder_check_paths",
    annotations={
        "title": "Check Paths Against Exclude Patterns",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False
    }
)
async def excluder_check_paths(params: CheckPathsInput) -> str:
    """Check which file paths are excluded from analysis.

    Patterns come from the project's .file-excluder.yml (if project_path is
    given) followed by any inline exclude_patterns. Each path is reported
    together with the first pattern that excluded it.

    Args:
        params (CheckPathsInput): Validated input parameters containing:
            - paths (List[str]): File paths to check
            - project_path (Optional[str]): Project root holding the configuration
            - exclude_patterns (Optional[List[str]]): Inline patterns
            - legacy_implicit_wildcard (Optional[bool]): Matching mode override
            - convention (Optional[PlatformConvention]): Path convention override
            - response_format (ResponseFormat): Output format (markdown or json)

    Returns:
        str: Per-path exclusion verdicts or error message

    Error Handling:
        - Returns error if project_path doesn't exist or isn't a directory
        - Returns error naming the pattern if a pattern is malformed
        - Returns error if the configuration file is invalid
    """
    try:
        if params.project_path:
            project_path = Path(params.project_path).resolve()
            if not project_path.is_dir():
                return f"Error: Project path is not a directory: {project_path}"

            excluder = build_exclusion_filter(
                project_path,
                params.exclude_patterns,
                legacy_implicit_wildcard=params.legacy_implicit_wildcard,
                convention=params.convention,
            )
        else:
            legacy = True if params.legacy_implicit_wildcard is None else params.legacy_implicit_wildcard
            excluder = PathExclusionFilter(params.exclude_patterns or [], legacy, params.convention)

        results = []
        for path in params.paths:
            match = excluder.find_matching_pattern(path)
            results.append({
                "path": path,
                "excluded": match is not None,
                "pattern": match.raw if match else None
            })
        excluded_count = sum(1 for result in results if result["excluded"])

        if params.response_format == ResponseFormat.JSON:
            return _truncate(json.dumps({
                "convention": excluder.convention.value,
                "legacy_implicit_wildcard": excluder.legacy_implicit_wildcard,
                "patterns": [pattern.raw for pattern in excluder.patterns],
                "results": results,
                "excluded_count": excluded_count
            }, indent=2))

        lines = ["# Exclusion Check", ""]
        lines.append(f"**Convention:** {excluder.convention.value}")
        lines.append(f"**Mode:** {_describe_mode(excluder.legacy_implicit_wildcard)}")
        lines.append(f"**Patterns:** {len(excluder.patterns)}")
        lines.append("")
        lines.append("## Results")
        for result in results:
            if result["excluded"]:
                lines.append(f"- `{result['path']}`: excluded by `{result['pattern']}`")
            else:
                lines.append(f"- `{result['path']}`: analysed")
        lines.append("")
        lines.append(f"**Summary:** {excluded_count} of {len(results)} paths excluded")

        return _truncate("\n".join(lines))

    except Exception as e:
        return handle_error(e, "check_paths")


@mcp.tool(
    name="excluder_initialize_config",
    annotations={
        "title": "Initialize File Excluder Configuration",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False
    }
)
async def excluder_initialize_config(params: InitializeConfigInput) -> str:
    """Initialize .file-excluder.yml configuration file for the project.

    Patterns are compiled before anything is written, so a malformed pattern
    never reaches the configuration file.

    Args:
        params (InitializeConfigInput): Validated input parameters containing:
            - project_path (str): Absolute path to project root
            - exclude_patterns (List[str]): Patterns to store
            - legacy_implicit_wildcard (bool): Matching mode to store
            - convention (Optional[PlatformConvention]): Path convention to store

    Returns:
        str: Success message with configuration summary or error message

    Error Handling:
        - Returns error if project_path doesn't exist or isn't a directory
        - Returns error if the configuration already exists
        - Returns error if a pattern is malformed or the file can't be written
    """
    try:
        project_path = Path(params.project_path).resolve()

        if not project_path.exists():
            return f"Error: Project path does not exist: {project_path}"

        if not project_path.is_dir():
            return f"Error: Project path is not a directory: {project_path}"

        path = config_path(project_path)
        if path.exists():
            return f"Configuration already exists at {path}. Delete it first to reinitialize."

        # Fails on malformed patterns
        PathExclusionFilter(
            params.exclude_patterns,
            params.legacy_implicit_wildcard,
            params.convention or PlatformConvention.current(),
        )

        config = ExcluderConfig(
            exclude=params.exclude_patterns,
            legacy_implicit_wildcard=params.legacy_implicit_wildcard,
            convention=params.convention
        )
        if not save_config(project_path, config):
            return "Error: Failed to write configuration file"

        convention = params.convention.value if params.convention else "host default"
        return f"""✓ Created {CONFIG_FILENAME} configuration

**Configuration Summary:**
- Exclude Patterns: {len(params.exclude_patterns)} patterns
- Mode: {_describe_mode(params.legacy_implicit_wildcard)}
- Convention: {convention}
"""

    except Exception as e:
        return handle_error(e, "initialize_config")


def main() -> None:
    # stdout carries the MCP protocol
    logging.basicConfig(
        stream=sys.stderr,
        level=os.environ.get(LOG_LEVEL_ENV, "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    mcp.run()


if __name__ == "__main__":
    main()
