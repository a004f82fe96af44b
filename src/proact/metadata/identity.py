"""Author identity from the local git configuration.

The resolver is a small capability interface so the metadata resolver never
has to know how identity is looked up:
- GitIdentityResolver: asks `git config` (the real thing)
- StaticIdentityResolver: fixed values (tests, or callers that already know)

Both apply the same rules: a missing name becomes AUTHOR_PLACEHOLDER, a
missing email stays None.
"""

import logging
import subprocess
from collections.abc import Callable
from functools import partial
from typing import NamedTuple, Protocol

from proact.models.metadata import AUTHOR_PLACEHOLDER

logger = logging.getLogger(__name__)

# (success, raw stdout) for a `git config <key>` style lookup
ConfigQuery = Callable[[str], tuple[bool, bytes]]

DEFAULT_GIT_TIMEOUT = 10


class Identity(NamedTuple):
    """Author identity used for copyright lines."""

    name: str
    email: str | None = None


class IdentityResolver(Protocol):
    """Anything that can tell who the author is."""

    def resolve_identity(self) -> Identity: ...


def make_identity(name: str | None, email: str | None) -> Identity:
    """Normalize raw lookups into an Identity.

    Args:
        name: Raw author name, None when the lookup failed
        email: Raw author email, None when the lookup failed

    Returns:
        Identity with trimmed values, placeholder name and None email as
        fallbacks
    """
    name = (name or "").strip()
    email = (email or "").strip()

    if not name:
        logger.debug("Author name unavailable, using %s", AUTHOR_PLACEHOLDER)

    return Identity(
        name=name or AUTHOR_PLACEHOLDER,
        email=email or None,
    )


def git_config_query(key: str, timeout: float = DEFAULT_GIT_TIMEOUT) -> tuple[bool, bytes]:
    """Run `git config <key>`.

    Args:
        key: Config key, e.g. "user.name"
        timeout: Seconds before the lookup counts as failed

    Returns:
        (success, stdout). Missing git, a non-zero exit and a timeout all
        count as failure.
    """
    try:
        result = subprocess.run(
            ["git", "config", key],
            capture_output=True,
            timeout=timeout,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError) as e:
        logger.debug("git config %s failed: %s", key, e)
        return False, b""

    return result.returncode == 0, result.stdout


class GitIdentityResolver:
    """Resolves the author from git's user.name and user.email.

    The two keys are looked up independently; either may fail without
    affecting the other.
    """

    def __init__(
        self,
        query: ConfigQuery | None = None,
        timeout: float = DEFAULT_GIT_TIMEOUT,
    ) -> None:
        """Initialize the resolver.

        Args:
            query: Config lookup to use (defaults to running git)
            timeout: Per-lookup timeout for the default git query
        """
        self._query = query or partial(git_config_query, timeout=timeout)

    def _lookup(self, key: str) -> str | None:
        success, stdout = self._query(key)
        if not success:
            logger.debug("git config %s is not set", key)
            return None

        try:
            return stdout.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("git config %s is not valid UTF-8", key)
            return None

    def resolve_identity(self) -> Identity:
        """Look up the author name and email."""
        return make_identity(self._lookup("user.name"), self._lookup("user.email"))


class StaticIdentityResolver:
    """Returns a fixed identity, with the same fallbacks as git lookups."""

    def __init__(self, name: str | None = None, email: str | None = None) -> None:
        self._identity = make_identity(name, email)

    def resolve_identity(self) -> Identity:
        return self._identity
