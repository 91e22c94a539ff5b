"""Unit tests for bundle resolution."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from rmapp.resolver.bundle import (
    AppNotFoundError,
    extract_quoted_substring,
    get_dot_app,
    locate_bundle,
    normalize_app_name,
    resolve_bundle_id,
)
from rmapp.utils.shell import CommandResult


@pytest.fixture
def mdls_available():
    with patch("rmapp.resolver.bundle.command_exists", return_value=True) as mock:
        yield mock


class TestNames:
    """Tests for name helpers."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("Demo", "Demo.app"), ("Demo.app", "Demo.app")],
    )
    def test_get_dot_app(self, name: str, expected: str) -> None:
        """The .app suffix is appended once."""
        assert get_dot_app(name) == expected

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Visual Studio Code", "Visual Studio Code"),
            ("Visual Studio Code.app", "Visual Studio Code"),
            ("/Applications/Visual Studio Code.app", "Visual Studio Code"),
            ("/Applications/Visual Studio Code.app/", "Visual Studio Code"),
        ],
    )
    def test_normalize_app_name(self, name: str, expected: str) -> None:
        """Paths and suffixes reduce to the human name."""
        assert normalize_app_name(name) == expected

    def test_extract_quoted_substring(self, mdls_output: str) -> None:
        """The first quoted value is returned."""
        assert extract_quoted_substring(mdls_output) == "com.example.demo"

    def test_extract_without_quotes(self) -> None:
        """Unquoted output yields an empty string."""
        assert extract_quoted_substring("kMDItemCFBundleIdentifier = (null)") == ""


class TestLocateBundle:
    """Tests for locate_bundle."""

    def test_user_applications(self, tmp_path: Path) -> None:
        """Bundles under ~/Applications are found."""
        bundle = tmp_path / "Applications" / "Rmapp Test Demo.app"
        bundle.mkdir(parents=True)

        assert locate_bundle("Rmapp Test Demo", home=tmp_path) == bundle

    def test_absolute_path(self, tmp_path: Path) -> None:
        """An absolute bundle path is accepted with or without suffix."""
        bundle = tmp_path / "Demo.app"
        bundle.mkdir()

        assert locate_bundle(str(bundle)) == bundle
        assert locate_bundle(str(tmp_path / "Demo")) == bundle

    def test_not_found(self, tmp_path: Path) -> None:
        """A missing bundle raises AppNotFoundError."""
        with pytest.raises(AppNotFoundError, match="App Rmapp Missing Demo not found"):
            locate_bundle("Rmapp Missing Demo", home=tmp_path)

    def test_file_is_not_a_bundle(self, tmp_path: Path) -> None:
        """A regular file named like a bundle is rejected."""
        (tmp_path / "Demo.app").write_text("")

        with pytest.raises(AppNotFoundError):
            locate_bundle(str(tmp_path / "Demo.app"))


class TestResolveBundleId:
    """Tests for resolve_bundle_id."""

    @patch("rmapp.resolver.bundle.run_command")
    def test_reads_identifier(
        self, mock_run: MagicMock, mdls_available: MagicMock, mdls_output: str
    ) -> None:
        """The identifier is parsed from mdls output."""
        mock_run.return_value = CommandResult(stdout=mdls_output, stderr="", returncode=0)

        bundle_id = resolve_bundle_id(Path("/Applications/Demo.app"))

        assert bundle_id == "com.example.demo"
        args = mock_run.call_args[0][0]
        assert args == [
            "mdls",
            "/Applications/Demo.app",
            "-name",
            "kMDItemCFBundleIdentifier",
        ]

    @patch("rmapp.resolver.bundle.run_command")
    def test_missing_identifier(self, mock_run: MagicMock, mdls_available: MagicMock) -> None:
        """A bundle without an identifier resolves to an empty string."""
        mock_run.return_value = CommandResult(
            stdout="kMDItemCFBundleIdentifier = (null)\n", stderr="", returncode=0
        )

        assert resolve_bundle_id(Path("/Applications/Demo.app")) == ""

    @patch("rmapp.resolver.bundle.run_command")
    def test_mdls_failure(self, mock_run: MagicMock, mdls_available: MagicMock) -> None:
        """A rejected bundle raises AppNotFoundError."""
        mock_run.return_value = CommandResult(stdout="", stderr="could not find", returncode=1)

        with pytest.raises(AppNotFoundError, match="App Demo not found"):
            resolve_bundle_id(Path("/Applications/Demo.app"))

    @patch("rmapp.resolver.bundle.run_command")
    def test_mdls_timeout(self, mock_run: MagicMock, mdls_available: MagicMock) -> None:
        """A hung mdls raises AppNotFoundError."""
        mock_run.side_effect = subprocess.TimeoutExpired("mdls", 30)

        with pytest.raises(AppNotFoundError, match="Cannot query metadata"):
            resolve_bundle_id(Path("/Applications/Demo.app"))

    @patch("rmapp.resolver.bundle.command_exists", return_value=False)
    def test_mdls_unavailable(self, mock_exists: MagicMock) -> None:
        """Without mdls resolution is impossible."""
        with pytest.raises(AppNotFoundError, match="requires macOS"):
            resolve_bundle_id(Path("/Applications/Demo.app"))
