"""Unit tests for the Deleter."""

import os
import time
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from rmapp.darwin.usage import SizeMode
from rmapp.deleter.models import DeletionMode, DeletionStatus
from rmapp.deleter.operator import Deleter

_real_unlink = os.unlink


@pytest.fixture
def files(tmp_path: Path) -> list[str]:
    """Three small files with known logical sizes."""
    paths = []
    for name, size in (("a.txt", 100), ("b.txt", 200), ("c.txt", 300)):
        path = tmp_path / name
        path.write_bytes(b"x" * size)
        paths.append(str(path))
    return paths


@pytest.fixture
def mock_trash_batch():
    with patch("rmapp.deleter.operator.run_privileged_trash", return_value=True) as mock:
        yield mock


@pytest.fixture
def mock_delete_batch():
    with patch("rmapp.deleter.operator.run_privileged_delete", return_value=True) as mock:
        yield mock


def _trash_except(refused: str) -> MagicMock:
    """A move_to_trash stand-in that removes files except ``refused``."""

    def fake(path: str) -> bool:
        if path == refused:
            return False
        _real_unlink(path)
        return True

    return MagicMock(side_effect=fake)


class TestTrashMode:
    """Tests for trash mode."""

    def test_all_trashed(self, files: list[str], mock_trash_batch: MagicMock) -> None:
        """Every path is trashed without escalation."""
        with patch("rmapp.deleter.operator.move_to_trash", return_value=True) as trash:
            report = Deleter(size_mode=SizeMode.LOGICAL).remove(files)

        assert trash.call_count == 3
        assert [o.status for o in report.outcomes] == [DeletionStatus.SUCCEEDED] * 3
        assert report.bytes_freed == 600
        assert report.escalated == []
        mock_trash_batch.assert_not_called()

    def test_refused_path_escalated_in_one_batch(
        self, files: list[str], mock_trash_batch: MagicMock
    ) -> None:
        """Only the refused path goes to the single privileged batch."""
        refused = files[1]
        with patch("rmapp.deleter.operator.move_to_trash", _trash_except(refused)):
            report = Deleter(size_mode=SizeMode.LOGICAL).remove(files)

        mock_trash_batch.assert_called_once_with([refused], None)
        assert report.escalated == [refused]
        assert all(o.succeeded for o in report.outcomes)
        assert report.outcomes[1].escalated is True
        assert report.outcomes[0].escalated is False
        assert report.bytes_freed == 600
        assert report.show_total is True

    def test_failed_batch(self, files: list[str], mock_trash_batch: MagicMock) -> None:
        """A failed batch marks escalated paths failed and hides the total."""
        mock_trash_batch.return_value = False
        refused = files[0]
        with patch("rmapp.deleter.operator.move_to_trash", _trash_except(refused)):
            report = Deleter(size_mode=SizeMode.LOGICAL).remove(files)

        assert report.escalation_failed is True
        assert report.show_total is False
        assert [o.path for o in report.failed] == [refused]
        assert report.failed[0].error == "Privileged operation failed"
        assert report.bytes_freed == 500

    def test_sudo_escalates_everything(
        self,
        files: list[str],
        mock_trash_batch: MagicMock,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Under sudo all paths are trashed on behalf of the invoking user."""
        monkeypatch.setenv("SUDO_USER", "alice")
        with patch("rmapp.deleter.operator.move_to_trash") as trash:
            report = Deleter().remove(files)

        trash.assert_not_called()
        mock_trash_batch.assert_called_once_with(files, "alice")
        assert all(o.escalated for o in report.outcomes)

    def test_batch_follows_input_order(
        self, files: list[str], mock_trash_batch: MagicMock
    ) -> None:
        """The batch lists refused paths in input order, not finish order."""
        delays = dict(zip(files, (0.2, 0.1, 0.0), strict=True))

        def refuse_slowly(path: str) -> bool:
            time.sleep(delays[path])
            return False

        with patch("rmapp.deleter.operator.move_to_trash", side_effect=refuse_slowly):
            report = Deleter().remove(files)

        mock_trash_batch.assert_called_once_with(files, None)
        assert report.escalated == files

    def test_vanished_after_refusal_skipped(
        self, files: list[str], mock_trash_batch: MagicMock
    ) -> None:
        """A path gone by the time the trash refuses it is not escalated."""

        def vanish(path: str) -> bool:
            _real_unlink(path)
            return False

        with patch("rmapp.deleter.operator.move_to_trash", side_effect=vanish):
            report = Deleter().remove(files[:1])

        assert report.outcomes[0].status == DeletionStatus.SKIPPED
        assert report.show_total is True
        mock_trash_batch.assert_not_called()


class TestForceMode:
    """Tests for force mode."""

    def test_deletes_files_and_directories(
        self, tmp_path: Path, mock_delete_batch: MagicMock
    ) -> None:
        """Files and directory trees are removed in place."""
        tree = tmp_path / "tree"
        (tree / "nested").mkdir(parents=True)
        (tree / "nested" / "data.bin").write_bytes(b"x" * 64)
        single = tmp_path / "single.txt"
        single.write_text("x")

        report = Deleter(DeletionMode.FORCE).remove([str(tree), str(single)])

        assert not tree.exists()
        assert not single.exists()
        assert all(o.succeeded for o in report.outcomes)
        mock_delete_batch.assert_not_called()

    def test_symlink_removed_not_target(
        self, tmp_path: Path, mock_delete_batch: MagicMock
    ) -> None:
        """A symlink to a directory is unlinked, its target kept."""
        target = tmp_path / "target"
        target.mkdir()
        (target / "keep.txt").write_text("keep")
        link = tmp_path / "link"
        os.symlink(target, link)

        report = Deleter(DeletionMode.FORCE).remove([str(link)])

        assert report.outcomes[0].succeeded
        assert not os.path.lexists(link)
        assert (target / "keep.txt").exists()

    def test_permission_denied_escalates(
        self, files: list[str], mock_delete_batch: MagicMock
    ) -> None:
        """Permission errors are collected for the privileged batch."""
        locked = files[2]

        def fake_unlink(path: str) -> None:
            if path == locked:
                raise PermissionError(13, "Permission denied", path)
            _real_unlink(path)

        with patch("rmapp.deleter.operator.os.unlink", side_effect=fake_unlink):
            report = Deleter(DeletionMode.FORCE, size_mode=SizeMode.LOGICAL).remove(files)

        mock_delete_batch.assert_called_once_with([locked])
        assert report.outcomes[2].escalated is True
        assert report.bytes_freed == 600

    def test_vanished_during_delete_skipped(
        self, files: list[str], mock_delete_batch: MagicMock
    ) -> None:
        """A path removed by someone else mid-deletion is skipped, not failed."""
        gone = FileNotFoundError(2, "No such file or directory", files[0])
        with patch("rmapp.deleter.operator.os.unlink", side_effect=gone):
            report = Deleter(DeletionMode.FORCE).remove(files[:1])

        assert report.outcomes[0].status == DeletionStatus.SKIPPED
        assert report.failed == []
        mock_delete_batch.assert_not_called()

    def test_other_errors_fail(self, files: list[str], mock_delete_batch: MagicMock) -> None:
        """Non-permission errors fail the path without escalation."""
        with patch("rmapp.deleter.operator.os.unlink", side_effect=OSError(16, "Busy")):
            report = Deleter(DeletionMode.FORCE).remove(files[:1])

        assert report.outcomes[0].status == DeletionStatus.FAILED
        assert report.outcomes[0].error is not None
        assert report.show_total is True
        mock_delete_batch.assert_not_called()


class TestCommon:
    """Behavior shared by both modes."""

    @pytest.mark.parametrize("mode", list(DeletionMode))
    def test_missing_path_skipped(
        self,
        mode: DeletionMode,
        tmp_path: Path,
        mock_trash_batch: MagicMock,
        mock_delete_batch: MagicMock,
    ) -> None:
        """A vanished path is skipped and contributes nothing."""
        report = Deleter(mode).remove([str(tmp_path / "gone")])

        assert report.outcomes[0].status == DeletionStatus.SKIPPED
        assert report.bytes_freed == 0
        assert report.skipped
        mock_trash_batch.assert_not_called()
        mock_delete_batch.assert_not_called()

    def test_duplicate_paths_handled_once(
        self, files: list[str], mock_trash_batch: MagicMock
    ) -> None:
        """A repeated path is removed and reported once."""
        with patch("rmapp.deleter.operator.move_to_trash", return_value=True) as trash:
            report = Deleter().remove([files[0], files[1], files[0]])

        assert trash.call_count == 2
        assert [o.path for o in report.outcomes] == files[:2]

    def test_empty_input(self) -> None:
        """Nothing to remove yields an empty report."""
        report = Deleter().remove([])
        assert report.outcomes == []
        assert report.bytes_freed == 0

    def test_sizes_measured_before_removal(
        self, files: list[str], mock_trash_batch: MagicMock
    ) -> None:
        """Every path is measured before the first removal."""
        events: list[str] = []

        def measure(path: str, mode: SizeMode) -> int:
            events.append("measure")
            return 10

        def trash(path: str) -> bool:
            events.append("trash")
            return True

        with (
            patch("rmapp.deleter.operator.disk_usage", side_effect=measure),
            patch("rmapp.deleter.operator.move_to_trash", side_effect=trash),
        ):
            report = Deleter().remove(files)

        assert events[:3] == ["measure"] * 3
        assert report.bytes_freed == 30

    def test_mode_property(self) -> None:
        """The configured mode is exposed."""
        assert Deleter(DeletionMode.FORCE).mode == DeletionMode.FORCE
