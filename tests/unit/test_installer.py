"""Tests for the asset installer."""

import os
import shutil
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from rampante.core.errors import PermissionWarning, TemplateMissing
from rampante.core.installer import (
    ASSET_MANIFEST,
    REQUIRED_SCRIPTS,
    STACK_FILES,
    AssetInstaller,
    InstallationTarget,
    get_bundled_templates_dir,
    get_managed_paths,
    install_assets,
    make_executable,
    resolve_templates_dir,
    verify_installation,
)

OLD_MTIME_NS = 1_000_000_000 * 1_000_000_000


def _age_files(paths: list[Path]) -> None:
    for path in paths:
        os.utime(path, ns=(OLD_MTIME_NS, OLD_MTIME_NS))


def _mtimes(paths: list[Path]) -> dict[Path, int]:
    return {path: path.stat().st_mtime_ns for path in paths}


def _copy_templates(tmp_path: Path) -> Path:
    templates = tmp_path / "templates-copy"
    shutil.copytree(get_bundled_templates_dir(), templates)
    return templates


class TestManifest:
    def test_bundled_templates_cover_manifest(self) -> None:
        templates = get_bundled_templates_dir()
        for entry in ASSET_MANIFEST:
            assert (templates / entry.source).is_file(), entry.source

    def test_manifest_layout(self) -> None:
        destinations = {entry.destination for entry in ASSET_MANIFEST}

        assert "rampante/command/rampante.md" in destinations
        assert "recommended-stacks/DEFINITIONS.md" in destinations
        for name in STACK_FILES:
            assert f"recommended-stacks/{name}" in destinations
        for name in REQUIRED_SCRIPTS:
            assert f"scripts/{name}" in destinations

    def test_only_stack_files_are_optional(self) -> None:
        optional = [entry.destination for entry in ASSET_MANIFEST if not entry.required]
        assert optional == [f"recommended-stacks/{name}" for name in STACK_FILES]

    def test_only_scripts_are_executable(self) -> None:
        executable = [entry.destination for entry in ASSET_MANIFEST if entry.executable]
        assert executable == [f"scripts/{name}" for name in REQUIRED_SCRIPTS]


class TestInstallationTarget:
    def test_writes_when_destination_missing(self, tmp_path: Path) -> None:
        target = InstallationTarget(tmp_path / "a", tmp_path / "b", force=False)
        assert target.should_write() is True

    def test_skips_existing_destination(self, tmp_path: Path) -> None:
        (tmp_path / "b").write_text("x", encoding="utf-8")
        target = InstallationTarget(tmp_path / "a", tmp_path / "b", force=False)
        assert target.should_write() is False

    def test_force_overwrites_existing(self, tmp_path: Path) -> None:
        (tmp_path / "b").write_text("x", encoding="utf-8")
        target = InstallationTarget(tmp_path / "a", tmp_path / "b", force=True)
        assert target.should_write() is True


class TestResolveTemplatesDir:
    def test_default_is_bundled(self) -> None:
        assert resolve_templates_dir() == get_bundled_templates_dir()

    def test_explicit_override(self, tmp_path: Path) -> None:
        assert resolve_templates_dir(tmp_path) == tmp_path
        assert resolve_templates_dir(str(tmp_path)) == tmp_path

    def test_ignores_environment(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("RAMPANTE_TEMPLATES_DIR", str(tmp_path))
        assert resolve_templates_dir() == get_bundled_templates_dir()


class TestAssetInstaller:
    def test_fresh_install_writes_every_file(self, project) -> None:
        report = install_assets(project.root)

        managed = get_managed_paths(project.root)
        assert sorted(report.written) == sorted(managed)
        assert report.skipped == []
        assert report.warnings == []
        for path in managed:
            assert path.is_file()
        assert verify_installation(project.root) is True

    def test_installed_content_matches_templates(self, project) -> None:
        install_assets(project.root)

        source = get_bundled_templates_dir() / "recommended-stacks" / "DEFINITIONS.md"
        installed = project.stacks_dir / "DEFINITIONS.md"
        assert installed.read_text(encoding="utf-8") == source.read_text(encoding="utf-8")

    def test_reinstall_without_force_writes_nothing(self, project) -> None:
        install_assets(project.root)
        managed = get_managed_paths(project.root)
        _age_files(managed)
        before = _mtimes(managed)

        report = install_assets(project.root)

        assert report.written == []
        assert report.removed == []
        assert sorted(report.skipped) == sorted(managed)
        assert _mtimes(managed) == before

    def test_reinstall_without_force_keeps_local_edits(self, project) -> None:
        install_assets(project.root)
        project.command_file.write_text("edited", encoding="utf-8")

        install_assets(project.root)

        assert project.command_file.read_text(encoding="utf-8") == "edited"

    def test_partial_install_is_completed(self, project) -> None:
        install_assets(project.root)
        missing = project.stacks_dir / "REACT_SPA.md"
        missing.unlink()

        report = install_assets(project.root)

        assert report.written == [missing]
        assert missing.is_file()

    def test_force_refreshes_every_file(self, project) -> None:
        install_assets(project.root)
        managed = get_managed_paths(project.root)
        project.command_file.write_text("edited", encoding="utf-8")
        _age_files(managed)
        before = _mtimes(managed)

        report = install_assets(project.root, force=True)

        after = _mtimes(managed)
        for path in managed:
            assert after[path] != before[path], path
        assert sorted(report.written) == sorted(managed)
        assert project.command_file.read_text(encoding="utf-8") != "edited"

    def test_force_removes_stale_files_in_managed_dirs(self, project) -> None:
        install_assets(project.root)
        stale = project.stacks_dir / "OLD_STACK.md"
        stale.write_text("old", encoding="utf-8")

        report = install_assets(project.root, force=True)

        assert not stale.exists()
        assert project.stacks_dir in report.removed

    def test_force_keeps_command_backups(self, project) -> None:
        install_assets(project.root)
        backup = project.command_file.parent / "rampante.1700000000.md"
        backup.write_text("previous command", encoding="utf-8")
        stray = project.command_file.parent / "notes.md"
        stray.write_text("x", encoding="utf-8")

        report = install_assets(project.root, force=True)

        assert backup.read_text(encoding="utf-8") == "previous command"
        assert not stray.exists()
        assert project.root / "rampante" in report.removed
        assert verify_installation(project.root) is True

    def test_force_keeps_user_files_in_scripts(self, project) -> None:
        install_assets(project.root)
        user_script = project.scripts_dir / "mine.sh"
        user_script.write_text("echo hi", encoding="utf-8")

        install_assets(project.root, force=True)

        assert user_script.exists()

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permissions only")
    def test_scripts_are_executable(self, project) -> None:
        install_assets(project.root)

        for name in REQUIRED_SCRIPTS:
            mode = stat.S_IMODE((project.scripts_dir / name).stat().st_mode)
            assert mode == 0o755

    def test_missing_required_template_is_fatal(self, project, tmp_path: Path) -> None:
        templates = _copy_templates(tmp_path)
        (templates / "command" / "rampante.md").unlink()

        with pytest.raises(TemplateMissing) as exc_info:
            AssetInstaller(templates).install(project.root)

        assert exc_info.value.path == templates / "command" / "rampante.md"
        assert not (project.root / "rampante").exists()

    def test_missing_required_template_does_not_remove_on_force(
        self, project, tmp_path: Path
    ) -> None:
        install_assets(project.root)
        templates = _copy_templates(tmp_path)
        (templates / "scripts" / "select-stack.sh").unlink()

        with pytest.raises(TemplateMissing):
            AssetInstaller(templates).install(project.root, force=True)

        assert verify_installation(project.root) is True

    def test_missing_optional_stack_file_is_skipped(self, project, tmp_path: Path) -> None:
        templates = _copy_templates(tmp_path)
        (templates / "recommended-stacks" / "STATIC_SITE.md").unlink()

        report = AssetInstaller(templates).install(project.root)

        assert report.missing_optional == ["recommended-stacks/STATIC_SITE.md"]
        assert len(report.warnings) == 1
        assert "STATIC_SITE.md" in str(report.warnings[0])
        assert not (project.stacks_dir / "STATIC_SITE.md").exists()
        assert verify_installation(project.root) is True

    def test_chmod_failure_is_a_warning(self, project) -> None:
        with patch("rampante.core.installer.os.name", "posix"), patch.object(
            Path, "chmod", side_effect=PermissionError("not permitted")
        ):
            report = install_assets(project.root)

        assert len(report.warnings) == len(REQUIRED_SCRIPTS)
        assert all(isinstance(w, PermissionWarning) for w in report.warnings)
        assert verify_installation(project.root) is True


class TestMakeExecutable:
    def test_skipped_on_non_posix(self, tmp_path: Path) -> None:
        script = tmp_path / "run.sh"
        script.write_text("echo", encoding="utf-8")

        with patch("rampante.core.installer.os.name", "nt"):
            assert make_executable(script) is None

    def test_returns_warning_on_error(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing.sh"

        with patch("rampante.core.installer.os.name", "posix"):
            warning = make_executable(missing)

        assert isinstance(warning, PermissionWarning)
        assert warning.path == missing


class TestVerifyInstallation:
    def test_empty_directory(self, tmp_path: Path) -> None:
        assert verify_installation(tmp_path) is False

    def test_empty_required_file(self, project) -> None:
        install_assets(project.root)
        (project.scripts_dir / "select-stack.sh").write_text("", encoding="utf-8")

        assert verify_installation(project.root) is False
