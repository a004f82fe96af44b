"""Proact utility modules.

- logging: Standardized logging with human/verbose/JSON modes
- version: Build information for `proact info`
"""

from proact.utils.logging import configure_from_cli, get_logger, setup_logging
from proact.utils.version import BuildInfo, get_build_info

__all__ = [
    "configure_from_cli",
    "get_logger",
    "setup_logging",
    "BuildInfo",
    "get_build_info",
]
