"""Test the command-line helpers."""

import logging
from unittest.mock import patch

from caretmark import __main__ as cli
from caretmark.model import TextFormat


def test_load_paragraph_reads_first_line(tmp_path, caplog):
    path = tmp_path / "doc.txt"
    path.write_text("H\bHi _\bt\nsecond line\n\nthird\n", encoding='utf-8')
    with caplog.at_level(logging.WARNING, logger="caretmark.__main__"):
        paragraph = cli.load_paragraph(str(path))
    assert "ignoring 2 more" in caplog.text
    assert paragraph.text == "Hi t"
    assert [(r.text, r.format) for r in paragraph.runs] == [
        ("H", TextFormat.BOLD), ("i ", TextFormat.NONE), ("t", TextFormat.UNDERLINE),
    ]


def test_load_paragraph_without_file_is_empty():
    assert len(cli.load_paragraph(None)) == 0


def test_version_flag(capsys):
    with patch.object(cli.sys, 'argv', ['caretmark', '--version']), \
         patch.object(cli, 'run_editor') as run_editor:
        cli.main()
    assert capsys.readouterr().out.strip() == cli.get_version_string()
    run_editor.assert_not_called()


def test_filename_is_passed_to_editor():
    with patch.object(cli.sys, 'argv', ['caretmark', 'notes.txt']), \
         patch.object(cli, 'run_editor') as run_editor:
        cli.main()
    run_editor.assert_called_once_with('notes.txt')


def test_single_line_file_loads_quietly(tmp_path, caplog):
    path = tmp_path / "doc.txt"
    path.write_text("plain\n", encoding='utf-8')
    with caplog.at_level(logging.WARNING, logger="caretmark.__main__"):
        paragraph = cli.load_paragraph(str(path))
    assert paragraph.text == "plain"
    assert caplog.records == []
