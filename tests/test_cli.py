from __future__ import annotations

import io
import json
import shutil

from pathlib import Path

import pytest
import yaml

from langrunner.cli import main


def _write_config(tmp_path: Path, **overrides) -> Path:
    config = {
        "runner": {
            "temp_dir": str(tmp_path),
            "home_prefixes": [],
            "session_startup_delay_s": 0,
            "shell": shutil.which("bash") or "/bin/bash",
        },
        "packages": {"manager": "apk", "timeout_s": 5},
    }
    config.update(overrides)
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(config))
    return path


def test_cli_lists_runners(tmp_path: Path, capsys) -> None:
    config = _write_config(
        tmp_path,
        runners={
            "javascript": {
                "extensions": ["js"],
                "description": "Node.js runtime",
                "commands": [{"cmd": 'node "{file}"', "packages": ["nodejs"]}],
            }
        },
    )
    assert main(["--list", "--config", str(config)]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["javascript"]["commands"][0]["packages"] == ["nodejs"]
    assert payload["rust"]["commands"][1]["requires_manifest"] == "Cargo.toml"
    assert list(payload)[0] == "python"


def test_cli_can_run(tmp_path: Path, capsys) -> None:
    config = str(_write_config(tmp_path))
    assert main(["main.PY", "--can-run", "--config", config]) == 0
    assert main(["notes.txt", "--can-run", "--config", config]) == 1
    assert main(["-", "--name", "x.go", "--can-run", "--config", config]) == 0
    assert capsys.readouterr().out.split() == ["yes", "no", "yes"]


def test_cli_config_errors_exit_2(tmp_path: Path, capsys) -> None:
    config = _write_config(
        tmp_path, runners={"bad": {"extensions": ["x"], "commands": []}}
    )
    assert main(["--list", "--config", str(config)]) == 2
    assert "Configuration error" in capsys.readouterr().err
    assert main(["--list", "--config", str(tmp_path / "missing.yaml")]) == 2


def test_cli_plugin_hook_errors_exit_2(
    tmp_path: Path, monkeypatch, capsys
) -> None:
    monkeypatch.syspath_prepend(str(Path(__file__).resolve().parent))
    config = _write_config(tmp_path, plugins={"modules": ["broken_plugin"]})
    assert main(["--list", "--config", str(config)]) == 2
    assert "broken_plugin" in capsys.readouterr().err


def test_cli_rejects_unknown_file_type(tmp_path: Path, capsys) -> None:
    source = tmp_path / "notes.txt"
    source.write_text("hello\n")
    config = str(_write_config(tmp_path))
    assert main([str(source), "--no-install", "--config", config]) == 1
    assert "No runner configured for .txt files" in capsys.readouterr().err


@pytest.mark.skipif(
    shutil.which("bash") is None or shutil.which("which") is None,
    reason="bash and which are required",
)
def test_cli_temp_dir_flag_beats_environment(tmp_path: Path, monkeypatch) -> None:
    flag_dir = tmp_path / "flag"
    flag_dir.mkdir()
    out = tmp_path / "where.txt"
    monkeypatch.setenv("LANGRUNNER_TEMP_DIR", str(tmp_path / "env"))
    monkeypatch.setattr("sys.stdin", io.StringIO(f"echo \"$0\" > {out}\n"))
    config = str(_write_config(tmp_path))

    argv = ["-", "--name", "t.sh", "--temp-dir", str(flag_dir), "--config", config]
    assert main(argv) == 0
    assert out.read_text().strip() == str(flag_dir / "t.sh")


def test_cli_requires_name_for_stdin(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("echo hi\n"))
    with pytest.raises(SystemExit):
        main(["-", "--config", str(_write_config(tmp_path))])


@pytest.mark.skipif(
    shutil.which("bash") is None or shutil.which("which") is None,
    reason="bash and which are required",
)
def test_cli_runs_shell_script_end_to_end(tmp_path: Path) -> None:
    project = tmp_path / "project"
    project.mkdir()
    marker = project / "ran.txt"
    script = project / "hello.sh"
    script.write_text('echo "$(pwd)" > ran.txt\n')
    config = str(_write_config(tmp_path))

    assert main([str(script), "--no-install", "--config", config]) == 0
    assert marker.read_text().strip() == str(project.resolve())
    assert not list(tmp_path.glob("langrunner_*.sh"))


@pytest.mark.skipif(
    shutil.which("bash") is None or shutil.which("which") is None,
    reason="bash and which are required",
)
def test_cli_runs_unsaved_buffer(tmp_path: Path, monkeypatch) -> None:
    out = tmp_path / "buffer.txt"
    monkeypatch.setattr("sys.stdin", io.StringIO(f"echo buffered > {out}\n"))
    config = str(_write_config(tmp_path))

    assert main(["-", "--name", "scratch.sh", "--config", config]) == 0
    assert out.read_text().strip() == "buffered"
    assert not (tmp_path / "scratch.sh").exists()
