"""Build information for `proact info`.

Reports the package version alongside where this copy of Proact came from:
the git commit of the source checkout (when running from one) and the host.
"""

import logging
import socket
import subprocess
from dataclasses import dataclass
from pathlib import Path

from proact import __author__, __license__, __repository__, __version__

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"


@dataclass(frozen=True)
class BuildInfo:
    """Version and provenance of the running Proact installation.

    Attributes:
        name: Distribution name
        version: Package version
        author: Package authors
        license: Package license identifier
        repository: Upstream repository URL
        git_short_hash: First 7 characters of the source checkout commit
        host: Host name of the machine running Proact
    """

    name: str
    version: str
    author: str
    license: str
    repository: str | None
    git_short_hash: str
    host: str

    def lines(self) -> list[str]:
        """Render the info block, one line per fact."""
        lines = [
            f"{self.name} {self.version}",
            self.author,
            f"License: {self.license}",
        ]
        if self.repository:
            lines.append(f"Repository: {self.repository}")
        lines.append(f"Build: {self.git_short_hash} on {self.host}")
        return lines


def get_git_short_hash(path: Path) -> str:
    """Get the short commit SHA of the git checkout containing path.

    Args:
        path: Any path inside the checkout

    Returns:
        7-character SHA, or "unknown" when path is not in a git checkout
    """
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            capture_output=True,
            text=True,
            cwd=path,
            timeout=10,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError) as e:
        logger.debug("git rev-parse failed: %s", e)
        return UNKNOWN

    if result.returncode != 0:
        return UNKNOWN

    sha = result.stdout.strip()
    return sha[:7] if sha else UNKNOWN


def get_host_name() -> str:
    """Get the local host name, or "unknown"."""
    try:
        return socket.gethostname() or UNKNOWN
    except OSError:
        return UNKNOWN


def get_build_info() -> BuildInfo:
    """Collect build information for the running installation."""
    package_dir = Path(__file__).resolve().parent.parent

    return BuildInfo(
        name="proact",
        version=__version__,
        author=__author__,
        license=__license__,
        repository=__repository__,
        git_short_hash=get_git_short_hash(package_dir),
        host=get_host_name(),
    )
