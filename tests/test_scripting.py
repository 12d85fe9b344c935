from pathlib import Path

import pytest

from langrunner.runtime.materialize import materialize
from langrunner.scripting import ScriptBuilder, ScriptManager, heredoc_marker
from langrunner.types import TargetFile


def _builder(temp_dir="/tmp", **kwargs):
    return ScriptBuilder(temp_dir=temp_dir, clock=lambda: 1700000000.0, **kwargs)


def _unsaved(content="print(1)", filename="main.py"):
    return TargetFile.from_text(filename, content)


def test_wrapper_for_temp_copy_writes_and_removes_file():
    file = _unsaved()
    target = materialize(file)
    wrapper = _builder().build_wrapper(
        'python3 "/tmp/main.py"', target, filename="main.py", content="print(1)"
    )
    lines = wrapper.splitlines()
    assert lines[0] == "#!/bin/bash"
    assert "printf '\\033[2J\\033[H' 2>/dev/null" in lines
    assert "cat > /tmp/main.py << 'SOURCE_EOF' 2>/dev/null" in lines
    assert "print(1)" in lines
    assert 'python3 "/tmp/main.py"' in lines
    assert "EXIT_CODE=$?" in lines
    assert "rm -f /tmp/main.py 2>/dev/null" in lines
    assert not any(line.startswith("cd ") for line in lines)
    assert "exit" not in lines
    assert "exit code: $EXIT_CODE" in wrapper
    assert "Program finished successfully" in wrapper


def test_wrapper_for_saved_file_changes_directory():
    file = TargetFile(
        filename="main.py",
        read_content=lambda: "print(1)",
        uri="file:///home/u/proj/main.py",
    )
    target = materialize(file)
    wrapper = _builder().build_wrapper('python3 "main.py"', target, filename="main.py")
    lines = wrapper.splitlines()
    assert "cd /home/u/proj && python3 \"main.py\"" in lines
    assert "SOURCE_EOF" not in wrapper
    assert "rm -f" not in wrapper


def test_banner_escapes_filename():
    target = materialize(_unsaved(filename='we"ird$.py'))
    wrapper = _builder().build_wrapper("true", target, filename='we"ird$.py')
    assert 'we\\"ird\\$.py' in wrapper


def test_heredoc_marker_avoids_collisions():
    assert heredoc_marker("SOURCE_EOF", "print(1)") == "SOURCE_EOF"
    body = "x\nSOURCE_EOF\nSOURCE_EOF_1\n"
    assert heredoc_marker("SOURCE_EOF", body) == "SOURCE_EOF_2"


def test_content_containing_marker_is_transported_intact():
    content = "echo start\nSOURCE_EOF\nWRAPPER_EOF\necho end"
    file = _unsaved(content, filename="tricky.sh")
    target = materialize(file)
    launch = _builder().build('bash "/tmp/tricky.sh"', target, filename="tricky.sh", content=content)
    assert "<< 'SOURCE_EOF_1'" in launch.wrapper
    assert "<< 'WRAPPER_EOF_1'" in launch.text
    assert content in launch.text


def test_launcher_creates_runs_and_deletes_wrapper():
    target = materialize(_unsaved())
    launch = _builder().build('python3 "/tmp/main.py"', target, filename="main.py", content="print(1)")
    assert launch.wrapper_path == "/tmp/langrunner_1700000000000.sh"
    assert launch.temp_path == "/tmp/main.py"
    lines = launch.text.splitlines()
    assert lines[0] == "cat > /tmp/langrunner_1700000000000.sh << 'WRAPPER_EOF' 2>/dev/null"
    assert "chmod +x /tmp/langrunner_1700000000000.sh 2>/dev/null" in lines
    assert "/tmp/langrunner_1700000000000.sh" in lines
    assert lines[-1] == "rm -f /tmp/langrunner_1700000000000.sh 2>/dev/null"
    assert launch.wrapper in launch.text


def test_script_manager_lists_templates():
    manager = ScriptManager()
    assert manager.list_templates() == ["launcher.sh.j2", "wrapper.sh.j2"]
    assert manager.search_paths == (manager.templates_dir,)


def test_script_manager_override_dir(tmp_path: Path):
    (tmp_path / "wrapper.sh.j2").write_text("#!/bin/sh\n{{ command }}\n")
    manager = ScriptManager(extra_dirs=[tmp_path])
    target = materialize(_unsaved())
    wrapper = _builder(manager=manager).build_wrapper("true", target, filename="main.py")
    assert wrapper == "#!/bin/sh\ntrue"


def test_script_manager_missing_override(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        ScriptManager(extra_dirs=[tmp_path / "missing"])
