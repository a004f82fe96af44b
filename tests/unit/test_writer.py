"""Unit tests for the artifact writer."""

import os
import re
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest

from proact.models.artifacts import Artifact, MergeDecision, WritePolicy
from proact.writer import (
    ArtifactError,
    ArtifactWriteError,
    ArtifactWriter,
    ExistingContentReadError,
    ensure_directory,
    format_separator,
)

SEPARATOR_PATTERN = re.compile(r"\n\n---- Added (\d{8}T\d{6}) ----\n\n")


def snapshot(directory: Path) -> dict[str, bytes]:
    """Capture every file under directory with its bytes."""
    return {
        str(path.relative_to(directory)): path.read_bytes()
        for path in sorted(directory.rglob("*"))
        if path.is_file()
    }


class TestFormatSeparator:
    """Tests for the append separator."""

    def test_format(self) -> None:
        """Test the separator embeds a second-precision timestamp."""
        separator = format_separator(datetime(2025, 3, 14, 9, 30, 12))

        assert separator == "\n\n---- Added 20250314T093012 ----\n\n"

    def test_sortable(self) -> None:
        """Test later timestamps sort after earlier ones."""
        earlier = format_separator(datetime(2025, 1, 9, 23, 59, 59))
        later = format_separator(datetime(2025, 1, 10, 0, 0, 0))

        assert earlier < later


class TestDecide:
    """Tests for the create/overwrite/append decision."""

    def test_missing_target(self, tmp_path: Path) -> None:
        """Test a missing file is created under either policy."""
        writer = ArtifactWriter()
        path = tmp_path / "learnings.md"

        assert writer.decide(path, WritePolicy.MERGE) is MergeDecision.CREATE
        assert writer.decide(path, WritePolicy.REPLACE) is MergeDecision.CREATE

    def test_existing_target(self, tmp_path: Path) -> None:
        """Test an existing file is appended to or overwritten by policy."""
        writer = ArtifactWriter()
        path = tmp_path / "learnings.md"
        path.write_text("# Existing\n")

        assert writer.decide(path, WritePolicy.MERGE) is MergeDecision.APPEND_WITH_SEPARATOR
        assert writer.decide(path, WritePolicy.REPLACE) is MergeDecision.OVERWRITE


class TestCreate:
    """Tests for writing new files."""

    @pytest.mark.parametrize("policy", [WritePolicy.MERGE, WritePolicy.REPLACE])
    def test_content_is_exact(self, tmp_path: Path, policy: WritePolicy) -> None:
        """Test a created file holds exactly the new content."""
        path = tmp_path / "learnings.md"
        content = "# New\n\nLine with unicode: ✓\r\nCRLF kept\n"

        result = ArtifactWriter().write(path, content, policy)

        assert result.decision is MergeDecision.CREATE
        assert path.read_bytes() == content.encode("utf-8")
        assert result.new_bytes == len(content.encode("utf-8"))
        assert result.written_bytes == result.new_bytes
        assert result.existing_bytes == 0

    def test_empty_content(self, tmp_path: Path) -> None:
        """Test creating an empty file."""
        path = tmp_path / "empty.md"

        ArtifactWriter().write(path, "", WritePolicy.MERGE)

        assert path.read_bytes() == b""


class TestOverwrite:
    """Tests for the replace policy."""

    def test_overwrites(self, tmp_path: Path) -> None:
        """Test existing content is replaced."""
        path = tmp_path / "LICENSE"
        path.write_text("old license text that is longer\n")

        result = ArtifactWriter().write(path, "new\n", WritePolicy.REPLACE)

        assert result.decision is MergeDecision.OVERWRITE
        assert result.existing_bytes == len(b"old license text that is longer\n")
        assert path.read_text() == "new\n"


class TestAppend:
    """Tests for the merge policy on existing files."""

    def test_existing_then_separator_then_new(
        self,
        tmp_path: Path,
        fixed_clock: Callable[[], datetime],
    ) -> None:
        """Test the appended file is existing + separator + new."""
        path = tmp_path / "learnings.md"
        path.write_text("# Existing\n")

        result = ArtifactWriter(clock=fixed_clock).write(path, "# New\n", WritePolicy.MERGE)

        assert result.decision is MergeDecision.APPEND_WITH_SEPARATOR
        assert path.read_text() == "# Existing\n\n\n---- Added 20250314T093012 ----\n\n# New\n"
        assert result.existing_bytes == len("# Existing\n")
        assert result.written_bytes == path.stat().st_size

    def test_existing_is_unmodified_prefix(self, tmp_path: Path) -> None:
        """Test existing bytes survive verbatim, including CRLF and no final newline."""
        path = tmp_path / "learnings.md"
        existing = "line one\r\nline two ✓\n\n\ttrailing".encode("utf-8")
        path.write_bytes(existing)

        ArtifactWriter().write(path, "appended", WritePolicy.MERGE)

        data = path.read_bytes()
        assert data.startswith(existing)
        rest = data[len(existing):].decode("utf-8")
        match = SEPARATOR_PATTERN.match(rest)
        assert match is not None
        assert rest[match.end():] == "appended"

    def test_repeated_appends_accumulate(self, tmp_path: Path) -> None:
        """Test every run adds a section below the previous ones."""
        path = tmp_path / "learnings.md"
        writer = ArtifactWriter()

        writer.write(path, "first", WritePolicy.MERGE)
        writer.write(path, "second", WritePolicy.MERGE)
        writer.write(path, "third", WritePolicy.MERGE)

        parts = SEPARATOR_PATTERN.split(path.read_text())
        # split keeps the captured timestamps between the sections
        assert parts[0::2] == ["first", "second", "third"]

    def test_non_utf8_existing_is_error(self, tmp_path: Path) -> None:
        """Test undecodable existing content is surfaced, not overwritten."""
        path = tmp_path / "learnings.md"
        original = b"\xff\xfe binary"
        path.write_bytes(original)

        with pytest.raises(ExistingContentReadError) as exc_info:
            ArtifactWriter().write(path, "# New\n", WritePolicy.MERGE)

        assert exc_info.value.path == path
        assert path.read_bytes() == original

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permission bits are not enforced for root",
    )
    def test_unreadable_existing_is_error(self, tmp_path: Path) -> None:
        """Test an unreadable existing file is surfaced, not treated as new."""
        path = tmp_path / "learnings.md"
        path.write_text("# Existing\n")
        path.chmod(0o200)

        try:
            with pytest.raises(ExistingContentReadError):
                ArtifactWriter().write(path, "# New\n", WritePolicy.MERGE)
        finally:
            path.chmod(0o600)

        assert path.read_text() == "# Existing\n"

    def test_directory_target_is_error(self, tmp_path: Path) -> None:
        """Test a directory where the file should be cannot be appended to."""
        path = tmp_path / "learnings.md"
        path.mkdir()

        with pytest.raises(ArtifactError):
            ArtifactWriter().write(path, "# New\n", WritePolicy.MERGE)


class TestDryRun:
    """Tests for dry-run mode."""

    @pytest.mark.parametrize("policy", [WritePolicy.MERGE, WritePolicy.REPLACE])
    def test_missing_target_not_created(self, tmp_path: Path, policy: WritePolicy) -> None:
        """Test dry-run reports CREATE without creating the file."""
        path = tmp_path / "learnings.md"

        result = ArtifactWriter(dry_run=True).write(path, "# New\n", policy)

        assert result.decision is MergeDecision.CREATE
        assert result.dry_run is True
        assert not path.exists()

    def test_existing_target_untouched(self, tmp_path: Path) -> None:
        """Test dry-run reports the append with sizes but changes nothing."""
        path = tmp_path / "learnings.md"
        path.write_text("# Existing\n")
        before = snapshot(tmp_path)

        result = ArtifactWriter(dry_run=True).write(path, "# New\n", WritePolicy.MERGE)

        assert snapshot(tmp_path) == before
        assert result.decision is MergeDecision.APPEND_WITH_SEPARATOR
        assert result.existing_bytes == len("# Existing\n")
        assert result.new_bytes == len("# New\n")

    @pytest.mark.parametrize("exists", [True, False])
    @pytest.mark.parametrize("policy", [WritePolicy.MERGE, WritePolicy.REPLACE])
    def test_same_decision_as_real_run(
        self,
        tmp_path: Path,
        exists: bool,
        policy: WritePolicy,
    ) -> None:
        """Test dry-run chooses what a real run would choose."""
        path = tmp_path / "target.md"
        if exists:
            path.write_text("# Existing\n")

        planned = ArtifactWriter(dry_run=True).write(path, "# New\n", policy)
        performed = ArtifactWriter().write(path, "# New\n", policy)

        assert planned.decision is performed.decision
        assert planned.written_bytes == performed.written_bytes

    def test_write_artifact(self, tmp_path: Path) -> None:
        """Test artifacts are written according to their own policy."""
        path = tmp_path / "learnings.md"
        path.write_text("# Existing\n")
        artifact = Artifact("learnings", path, "# New\n", WritePolicy.MERGE)

        result = ArtifactWriter(dry_run=True).write_artifact(artifact)

        assert result.decision is MergeDecision.APPEND_WITH_SEPARATOR


class TestEnsureDirectory:
    """Tests for output directory creation."""

    def test_creates_nested(self, tmp_path: Path) -> None:
        """Test parents are created too."""
        directory = tmp_path / "a" / "b" / "docs"

        assert ensure_directory(directory) is True
        assert directory.is_dir()

    def test_existing(self, tmp_path: Path) -> None:
        """Test an existing directory is left alone."""
        assert ensure_directory(tmp_path) is False

    def test_dry_run(self, tmp_path: Path) -> None:
        """Test dry-run reports without creating."""
        directory = tmp_path / "docs"

        assert ensure_directory(directory, dry_run=True) is True
        assert not directory.exists()

    def test_file_in_the_way(self, tmp_path: Path) -> None:
        """Test a file blocking the directory path is a write error."""
        blocker = tmp_path / "docs"
        blocker.write_text("not a directory")

        with pytest.raises(ArtifactWriteError):
            ensure_directory(blocker / "nested")
