import subprocess
import sys
from pathlib import Path

import pytest

from scratchdir import __version__
from scratchdir.__main__ import main
from scratchdir.core import _log


@pytest.fixture(autouse=True)
def restore_logging():
    level = _log.logger.level
    yield
    handler = _log.current_handler
    if handler in _log.logger.handlers:
        _log.logger.removeHandler(handler)
        handler.close()
    _log.logger.setLevel(level)


@pytest.mark.timeout(3)
def test_cli_version():
    cmd = [sys.executable, "-m", "scratchdir", "--version"]
    assert subprocess.check_output(cmd).decode().strip() == __version__


def test_cli_no_command_prints_help(capsys):
    main([])
    assert "usage: scratchdir" in capsys.readouterr().out


def test_cli_create(temp_root, capsys):
    main(["create", "-n", "2"])
    paths = [Path(line) for line in capsys.readouterr().out.splitlines()]
    assert len(paths) == 2
    assert paths[0] != paths[1]
    for path in paths:
        assert path.parent == temp_root
        assert path.is_dir()


def test_cli_create_session_releases(temp_root, capsys):
    main(["create", "--provider", "session"])
    (line,) = capsys.readouterr().out.splitlines()
    assert Path(line).name.startswith("scratchdir")
    assert not Path(line).exists()


def test_cli_create_from_config(tmp_path, capsys):
    config = tmp_path / "settings.yaml"
    config.write_text(f"root: {tmp_path}\nprefix: nightly\n")
    main(["create", "--config", str(config)])
    (line,) = capsys.readouterr().out.splitlines()
    assert Path(line).parent == tmp_path
    assert Path(line).name.startswith("nightly")


def test_cli_create_failure(missing_temp_root, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["create"])
    assert exc_info.value.code == 1
    assert "Cannot create temporary directory" in capsys.readouterr().err


def test_cli_empty_context(temp_root, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["create", "--context", ""])
    assert exc_info.value.code == 1
    assert "must not be empty" in capsys.readouterr().err
    assert list(temp_root.iterdir()) == []


def test_cli_bad_count(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["create", "--count", "0"])
    assert exc_info.value.code == 2


def test_cli_bad_yaml(tmp_path, capsys):
    config = tmp_path / "bad.yaml"
    config.write_text("provider: [unclosed\n")
    with pytest.raises(SystemExit) as exc_info:
        main(["create", "--config", str(config)])
    assert exc_info.value.code == 1
    assert "Cannot parse" in capsys.readouterr().err


def test_cli_escaping_prefix_in_config(tmp_path, capsys):
    config = tmp_path / "settings.yaml"
    config.write_text(f"root: {tmp_path}\nprefix: ../out\n")
    with pytest.raises(SystemExit) as exc_info:
        main(["create", "--config", str(config)])
    assert exc_info.value.code == 1
    assert "prefix must be a plain name" in capsys.readouterr().err
    assert list(tmp_path.parent.glob("out*")) == []


def test_cli_log_level_is_case_insensitive(temp_root, capsys):
    main(["--log-level", "debug", "create"])
    captured = capsys.readouterr()
    (line,) = captured.out.splitlines()
    assert f"Created {line}" in captured.err


def test_cli_unknown_log_level(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--log-level", "chatty", "create"])
    assert exc_info.value.code == 2
