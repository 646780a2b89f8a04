"""Tests for the command-line interface."""

import json

from builders import extended_segment, jpeg, main_segment
from xmplite.cli import flatten, format_output, main

SIDECAR = ('<x:xmpmeta><rdf:RDF><rdf:Description xmp:Rating="5">'
           '<dc:subject><rdf:Bag><rdf:li>cat</rdf:li><rdf:li>dog</rdf:li></rdf:Bag></dc:subject>'
           '</rdf:Description></rdf:RDF></x:xmpmeta>')


def write_sidecar(tmp_path, name="photo.xmp"):
    path = tmp_path / name
    path.write_text(SIDECAR, encoding="utf-8")
    return path


def test_json_output(tmp_path, capsys):
    path = write_sidecar(tmp_path)
    assert main([str(path)]) == 0
    assert json.loads(capsys.readouterr().out) == {"Rating": 5, "subject": ["cat", "dog"]}

def test_group_by_namespace_flag(tmp_path, capsys):
    path = write_sidecar(tmp_path)
    assert main(["-g", str(path)]) == 0
    assert json.loads(capsys.readouterr().out) == {"xmp": {"Rating": 5}, "dc": {"subject": ["cat", "dog"]}}

def test_text_output(tmp_path, capsys):
    path = write_sidecar(tmp_path)
    assert main(["-f", "text", str(path)]) == 0
    assert capsys.readouterr().out.splitlines() == ["Rating: 5", "subject: cat, dog"]

def test_single_segment_flag(tmp_path, capsys):
    path = tmp_path / "photo.jpg"
    path.write_bytes(jpeg(main_segment(b'<rdf:Description xmp:Rating="2"/>'),
                          extended_segment(b'<rdf:Description xmp:Label="Red"/>')))
    assert main([str(path)]) == 0
    assert json.loads(capsys.readouterr().out) == {"Rating": 2, "Label": "Red"}
    assert main(["--single-segment", str(path)]) == 0
    assert json.loads(capsys.readouterr().out) == {"Rating": 2}

def test_multiple_files_keyed_by_path(tmp_path, capsys):
    first = write_sidecar(tmp_path, "a.xmp")
    second = tmp_path / "b.xmp"
    second.write_text("", encoding="utf-8")
    assert main([str(first), str(second)]) == 0
    output = json.loads(capsys.readouterr().out)
    assert output == {str(first): {"Rating": 5, "subject": ["cat", "dog"]}, str(second): None}

def test_missing_file_sets_exit_status(tmp_path, capsys):
    assert main([str(tmp_path / "missing.jpg")]) == 1
    assert "Error:" in capsys.readouterr().err

def test_flatten_nested():
    assert list(flatten({"dc": {"title": "A"}, "xmp": {"Rating": 5}})) == [("dc.title", "A"), ("xmp.Rating", 5)]

def test_format_output_none():
    assert format_output(None, "text") == ""
    assert format_output(None, "json") == "null"
