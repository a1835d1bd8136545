"""Test the command line entry point."""

import subprocess
import sys
from unittest.mock import patch
from redit import __main__ as cli
from redit.version import get_version_string


def test_version_flag(capsys, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["redit", "--version"])

    cli.main()
    out = capsys.readouterr().out
    assert out.startswith("redit ")


def test_version_string_format():
    version = get_version_string()

    assert version.startswith("redit ")
    assert version.endswith(")")


def test_main_opens_file(monkeypatch, tmp_path):
    path = tmp_path / "doc.txt"
    monkeypatch.setattr(sys, "argv", ["redit", str(path)])
    monkeypatch.delenv(cli.LOG_ENV_VAR, raising=False)

    with patch("redit.editor.Editor") as editor_class:
        cli.main()
    editor = editor_class.return_value
    editor.load_init_script.assert_called_once_with()
    editor.open.assert_called_once_with(str(path))
    editor.run.assert_called_once_with()


def test_main_without_file(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["redit"])
    monkeypatch.delenv(cli.LOG_ENV_VAR, raising=False)

    with patch("redit.editor.Editor") as editor_class:
        cli.main()
    editor_class.return_value.open.assert_not_called()
    editor_class.return_value.run.assert_called_once_with()


def test_package_import_leaves_terminal_libraries_unloaded():
    code = "import sys, redit; print(sorted(m for m in ('blessed', 'curtsies') if m in sys.modules))"
    result = subprocess.run([sys.executable, "-c", code], capture_output=True, text=True, check=True)

    assert result.stdout.strip() == "[]"
