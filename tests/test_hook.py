"""Tests for login hook management."""

import stat

import pytest

from motdyn import hook


class TestInstall:
    """Tests for installing the hook script."""

    def test_writes_executable_script(self, tmp_path):
        """Test the script is written with mode 0755."""
        path = hook.install(str(tmp_path))

        assert path == tmp_path / "motdyn.sh"
        assert path.read_text(encoding="utf-8") == hook.HOOK_SCRIPT
        assert stat.S_IMODE(path.stat().st_mode) == 0o755

    def test_script_runs_motdyn_when_available(self):
        """Test the script guards on motdyn being on PATH."""
        assert hook.HOOK_SCRIPT.startswith("#!/bin/sh\n")
        assert 'if [ -x "$(command -v motdyn)" ]; then' in hook.HOOK_SCRIPT

    def test_missing_profile_dir(self, tmp_path):
        """Test installing into a missing directory fails."""
        missing = tmp_path / "profile.d"
        with pytest.raises(hook.HookError, match="not found"):
            hook.install(str(missing))
        assert not missing.exists()

    def test_reinstall_overwrites(self, tmp_path):
        """Test installing twice leaves one current script."""
        (tmp_path / "motdyn.sh").write_text("stale", encoding="utf-8")
        hook.install(str(tmp_path))
        assert (tmp_path / "motdyn.sh").read_text(encoding="utf-8") == hook.HOOK_SCRIPT

    def test_write_failure_raises_hook_error(self, tmp_path):
        """Test an OSError while writing the script becomes a HookError."""
        (tmp_path / "motdyn.sh").mkdir()
        with pytest.raises(hook.HookError, match="Is a directory"):
            hook.install(str(tmp_path))


class TestUninstallAndStatus:
    """Tests for removal and status reporting."""

    def test_uninstall_removes_script(self, tmp_path):
        """Test the installed script is deleted."""
        hook.install(str(tmp_path))
        assert hook.uninstall(str(tmp_path)) is True
        assert not (tmp_path / "motdyn.sh").exists()

    def test_uninstall_without_script(self, tmp_path):
        """Test removing an absent script is not an error."""
        assert hook.uninstall(str(tmp_path)) is False

    def test_status(self, tmp_path):
        """Test status follows the script's presence."""
        assert hook.status(str(tmp_path)) is False
        assert hook.status_message(str(tmp_path)) == (
            f"The system is NOT installed with motdyn (no {tmp_path / 'motdyn.sh'})."
        )

        hook.install(str(tmp_path))

        assert hook.status(str(tmp_path)) is True
        assert hook.status_message(str(tmp_path)) == (
            f"The system IS installed with motdyn script at {tmp_path / 'motdyn.sh'}"
        )

    def test_uninstall_failure_raises_hook_error(self, tmp_path):
        """Test an OSError while deleting the script becomes a HookError."""
        (tmp_path / "motdyn.sh").mkdir()
        with pytest.raises(hook.HookError):
            hook.uninstall(str(tmp_path))
        assert (tmp_path / "motdyn.sh").is_dir()
