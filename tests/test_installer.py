import io
import shutil

import pytest

from wasmpack import installer


class _TtyInput(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture
def rustup_dir(tmp_path, monkeypatch):
    bin_dir = tmp_path / "cargo-bin"
    bin_dir.mkdir()
    rustup = bin_dir / "rustup"
    rustup.write_text("rustup")
    monkeypatch.setattr(shutil, "which", lambda name: str(rustup) if name == "rustup" else None)
    return bin_dir


@pytest.fixture
def executable(tmp_path):
    exe = tmp_path / "wasm-pack-init"
    exe.write_text("new binary")
    return exe


def test_no_rustup_raises(monkeypatch):
    monkeypatch.setattr(shutil, "which", lambda name: None)
    with pytest.raises(installer.InstallError, match="rustup"):
        installer.do_install(argv=[])


def test_installs_next_to_rustup(rustup_dir, executable):
    destination = installer.do_install(executable=executable, argv=[])
    assert destination.parent == rustup_dir
    assert destination.stem == "wasm-pack"
    assert destination.read_text() == "new binary"


def test_force_flag_overwrites(rustup_dir, executable):
    first = installer.do_install(executable=executable, argv=[])
    first.write_text("old binary")
    installer.do_install(executable=executable, argv=["prog", "-f"])
    assert first.read_text() == "new binary"


def test_existing_install_without_tty_raises(rustup_dir, executable):
    installer.do_install(executable=executable, argv=[])
    with pytest.raises(installer.InstallError, match="pass `-f`"):
        installer.do_install(executable=executable, argv=[], stdin=io.StringIO("y\n"))


def test_confirm_yes_on_tty(tmp_path):
    stderr = io.StringIO()
    installer.confirm_can_overwrite(tmp_path / "x", argv=[], stdin=_TtyInput("Y\n"), stderr=stderr)
    assert "would you like to overwrite this file?" in stderr.getvalue()


def test_confirm_no_on_tty_aborts(tmp_path):
    with pytest.raises(installer.InstallError, match="aborting installation"):
        installer.confirm_can_overwrite(
            tmp_path / "x", argv=[], stdin=_TtyInput("n\n"), stderr=io.StringIO()
        )


def test_install_reports_error_and_exits_zero(monkeypatch, capsys):
    monkeypatch.setattr(shutil, "which", lambda name: None)
    with pytest.raises(SystemExit) as excinfo:
        installer.install(argv=[])
    assert excinfo.value.code == 0
    assert "failed to find an installation of `rustup`" in capsys.readouterr().err