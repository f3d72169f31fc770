import io

from iftkit.convert_iftb import convert_iftb
from iftkit.iftb2config import main

DUMP = "gidMap: 0:0, 1:1, 2:1\nchunkSet indexes: 0\n"


def test_main_prints_config(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(DUMP))
    status = main([])
    out = capsys.readouterr().out
    assert status == 0
    assert out == convert_iftb(DUMP).to_text() + "\n"


def test_main_output_contains_segments(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(DUMP))
    main([])
    out = capsys.readouterr().out
    assert "glyph_segments {" in out
    assert "initial_glyph_patches {" in out


def test_main_reports_parse_failure(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("gidMap: x:1\n"))
    status = main([])
    captured = capsys.readouterr()
    assert status == -1
    assert "Failure parsing iftb info dump" in captured.err
    assert captured.out == ""


def test_main_empty_input(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    status = main([])
    out = capsys.readouterr().out
    assert status == 0
    assert out == convert_iftb("").to_text() + "\n"