"""Test fixtures for Proact.

Sample Repositories:
- sample_repos/rust_project: Cargo.toml with license and repository
- sample_repos/node_project: package.json with a nested repository object
- sample_repos/bare_project: no manifests at all
"""

from pathlib import Path

FIXTURES_DIR = Path(__file__).parent

SAMPLE_REPOS_DIR = FIXTURES_DIR / "sample_repos"


def get_sample_repo(name: str) -> Path:
    """Get path to a sample repository.

    Raises:
        ValueError: If repository doesn't exist
    """
    repo_path = SAMPLE_REPOS_DIR / name
    if not repo_path.exists():
        raise ValueError(f"Sample repository not found: {name}")
    return repo_path
