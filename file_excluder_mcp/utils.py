"""Utility functions for file-excluder: config persistence and error formatting."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from file_excluder_mcp.constants import CONFIG_FILENAME
from file_excluder_mcp.models import ExcluderConfig

logger = logging.getLogger(__name__)


def config_path(project_path: Path) -> Path:
    return project_path / CONFIG_FILENAME


def load_config(project_path: Path) -> Optional[ExcluderConfig]:
    """Load .file-excluder.yml configuration.

    Returns None when the file is missing or cannot be parsed as YAML.

    Raises:
        pydantic.ValidationError: If the YAML content is not a valid configuration
    """
    path = config_path(project_path)
    if not path.exists():
        return None

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not read %s: %s", path, e)
        return None

    return ExcluderConfig.model_validate(data or {})


def save_config(project_path: Path, config: ExcluderConfig) -> bool:
    """Save .file-excluder.yml configuration."""
    path = config_path(project_path)
    data: Dict[str, Any] = config.model_dump(mode="json", exclude_none=True)
    try:
        with open(path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        return True
    except OSError as e:
        logger.warning("Could not write %s: %s", path, e)
        return False


def handle_error(e: Exception, context: str = "", log_to_stderr: bool = True) -> str:
    """Consistent error formatting across all tools."""
    error_msg = f"Error: {type(e).__name__}"
    if context:
        error_msg += f" in {context}"
    error_msg += f": {str(e)}"
    if log_to_stderr:
        logger.error(error_msg)
    return error_msg
