import pytest

from vectorwire.cli import main


def run(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


def test_encode(capsys):
    assert run(["encode", "vector", "[1,2,3]"]) == 0
    assert capsys.readouterr().out.strip() == "00030000" "3f800000" "40000000" "40400000"


def test_decode(capsys):
    assert run(["decode", "bit", "00000003a0"]) == 0
    assert capsys.readouterr().out.strip() == "101"
    assert run(["decode", "sparsevec", "000000050000000100000000000000023f800000"]) == 0
    assert capsys.readouterr().out.strip() == "{3:1}/5"


def test_codec_errors_exit_nonzero(capsys):
    assert run(["decode", "vector", "000100013f800000"]) == 1
    assert "reserved" in capsys.readouterr().err
    assert run(["encode", "vector", "[]"]) == 1
    assert "at least 1 dimension" in capsys.readouterr().err
    assert run(["decode", "halfvec", "zz"]) == 1


def test_distance(capsys):
    assert run(["distance", "cosine", "embedding", "vector", "[1,2,3]"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ['"embedding" <=> $1::vector', "$1 = [1,2,3]"]


def test_unknown_type_rejected_by_parser():
    assert run(["encode", "tsvector", "x"]) == 2


def test_demo_copies_example(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert run(["demo"]) == 0
    assert "copy_records_to_table" in (tmp_path / "demo.py").read_text()
    assert run(["demo"]) == 1
