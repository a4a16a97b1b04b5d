from __future__ import annotations

from pathlib import Path

import pytest

from rustprebuilts.core.config import Config, PatchesConfig
from rustprebuilts.core.result import Err, Ok
from rustprebuilts.output.console import MockConsole
from rustprebuilts.platform.detection import BuildOS
from rustprebuilts.services.patches import PatchService, list_patches, patch_command
from rustprebuilts.services.runner import DefaultCommandRunner


class RecordingRunner:
    def __init__(self, returncodes: dict[str, int] | None = None):
        self.calls: list[tuple[list[str], Path | None]] = []
        self._returncodes = returncodes or {}

    def run(self, args: list[str], *, stdin: Path | None = None) -> int:
        self.calls.append((args, stdin))
        name = stdin.name if stdin else ""
        return self._returncodes.get(name, 0)


def _setup(tmp_path: Path, *patch_names: str) -> tuple[Path, Path]:
    patches = tmp_path / "patches"
    patches.mkdir()
    for name in patch_names:
        (patches / name).write_text("--- a\n+++ b\n", encoding="utf-8")
    target = tmp_path / "1.81.0"
    target.mkdir()
    return patches, target


def _service(runner: RecordingRunner, console: MockConsole, strip: int = 3) -> PatchService:
    return PatchService(
        build_os=BuildOS.LINUX,
        config=Config(patches=PatchesConfig(strip=strip)),
        console=console,
        runner=runner,
    )


def test_list_patches_sorted_by_filename(tmp_path: Path) -> None:
    patches, _ = _setup(tmp_path, "0010-b.patch", "0002-a.patch", "0001-z.patch")
    (patches / "subdir").mkdir()

    assert [p.name for p in list_patches(patches)] == [
        "0001-z.patch",
        "0002-a.patch",
        "0010-b.patch",
    ]


def test_patch_command() -> None:
    assert patch_command(Path("1.81.0"), 3) == ["patch", "-p3", "-d", "1.81.0"]


def test_apply_runs_patch_for_each_file_in_order(tmp_path: Path) -> None:
    patches, target = _setup(tmp_path, "0002-b.patch", "0001-a.patch")
    runner = RecordingRunner()
    console = MockConsole()

    result = _service(runner, console).apply(target, patches_dir=patches)

    assert isinstance(result, Ok)
    assert [p.name for p in result.value] == ["0001-a.patch", "0002-b.patch"]
    assert [stdin.name for _, stdin in runner.calls if stdin] == ["0001-a.patch", "0002-b.patch"]
    assert runner.calls[0][0] == ["patch", "-p3", "-d", str(target)]
    assert f"----- Applying {patches / '0001-a.patch'}" in console.texts("print")


def test_apply_uses_configured_strip_and_override(tmp_path: Path) -> None:
    patches, target = _setup(tmp_path, "0001-a.patch")
    runner = RecordingRunner()

    _service(runner, MockConsole(), strip=1).apply(target, patches_dir=patches)
    _service(runner, MockConsole(), strip=1).apply(target, patches_dir=patches, strip=0)

    assert runner.calls[0][0][1] == "-p1"
    assert runner.calls[1][0][1] == "-p0"


def test_apply_stops_at_first_failure(tmp_path: Path) -> None:
    patches, target = _setup(tmp_path, "0001-a.patch", "0002-b.patch", "0003-c.patch")
    runner = RecordingRunner({"0002-b.patch": 1})

    result = _service(runner, MockConsole()).apply(target, patches_dir=patches)

    assert isinstance(result, Err)
    assert result.error.kind == "patch_failed"
    assert result.error.returncode == 1
    assert "0002-b.patch" in result.error.message
    assert len(runner.calls) == 2


def test_keep_going_reports_last_status(tmp_path: Path) -> None:
    patches, target = _setup(tmp_path, "0001-a.patch", "0002-b.patch", "0003-c.patch")
    runner = RecordingRunner({"0001-a.patch": 1})
    console = MockConsole()

    result = _service(runner, console).apply(target, patches_dir=patches, keep_going=True)

    # The last patch succeeded, so the run succeeds like the shell loop did.
    assert isinstance(result, Ok)
    assert [p.name for p in result.value] == ["0002-b.patch", "0003-c.patch"]
    assert len(runner.calls) == 3
    assert any("0001-a.patch" in w for w in console.texts("warning"))


def test_keep_going_fails_when_last_patch_fails(tmp_path: Path) -> None:
    patches, target = _setup(tmp_path, "0001-a.patch", "0002-b.patch")
    runner = RecordingRunner({"0002-b.patch": 2})

    result = _service(runner, MockConsole()).apply(target, patches_dir=patches, keep_going=True)

    assert isinstance(result, Err)
    assert result.error.returncode == 2


def test_dry_run_does_not_execute(tmp_path: Path) -> None:
    patches, target = _setup(tmp_path, "0001-a.patch")
    runner = RecordingRunner()
    console = MockConsole()

    result = _service(runner, console).apply(target, patches_dir=patches, dry_run=True)

    assert isinstance(result, Ok)
    assert result.value == []
    assert runner.calls == []
    assert any(t.startswith("patch -p3 -d") for t in console.texts("print"))


def test_missing_patches_dir(tmp_path: Path) -> None:
    target = tmp_path / "1.81.0"
    target.mkdir()
    runner = RecordingRunner()

    result = _service(runner, MockConsole()).apply(target, patches_dir=tmp_path / "nope")

    assert isinstance(result, Err)
    assert result.error.kind == "patches_missing"
    assert runner.calls == []


def test_missing_target_dir(tmp_path: Path) -> None:
    patches, _ = _setup(tmp_path, "0001-a.patch")
    runner = RecordingRunner()

    result = _service(runner, MockConsole()).apply(tmp_path / "9.9.9", patches_dir=patches)

    assert isinstance(result, Err)
    assert result.error.kind == "target_missing"
    assert runner.calls == []


class FailingRunner:
    def run(self, args: list[str], *, stdin: Path | None = None) -> int:
        raise PermissionError(13, "Permission denied", str(stdin))


def test_signal_killed_patch_is_reported(tmp_path: Path) -> None:
    patches, target = _setup(tmp_path, "0001-a.patch")
    runner = RecordingRunner({"0001-a.patch": -9})

    result = _service(runner, MockConsole()).apply(target, patches_dir=patches)

    assert isinstance(result, Err)
    assert result.error.kind == "patch_failed"
    assert result.error.returncode == -9
    assert "killed by signal 9" in result.error.message


def test_unreadable_patch_is_io_error(tmp_path: Path) -> None:
    patches, target = _setup(tmp_path, "0001-a.patch", "0002-b.patch")
    service = PatchService(
        build_os=BuildOS.LINUX, config=Config(), console=MockConsole(), runner=FailingRunner()
    )

    result = service.apply(target, patches_dir=patches, keep_going=True)

    assert isinstance(result, Err)
    assert result.error.kind == "io_error"
    assert "0001-a.patch" in result.error.message


def test_default_runner_raises_when_patch_file_vanishes(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        DefaultCommandRunner().run(["patch"], stdin=tmp_path / "gone.patch")
