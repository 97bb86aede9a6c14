import io
import os
import sys
import zlib

import pytest

from esynth.zpipe import (
    CHUNK,
    ZpipeError,
    compress_stream,
    decompress_stream,
    main,
    zlib_compress,
)

SAMPLE = b"C1=CC=CC=C1\tbenzene\n" * 50
LARGE = os.urandom(CHUNK) + b"abc" * (CHUNK // 2)


@pytest.mark.parametrize("data", [b"", SAMPLE, LARGE])
def test_round_trip(data):
    compressed = io.BytesIO()
    compress_stream(io.BytesIO(data), compressed)
    restored = io.BytesIO()
    decompress_stream(io.BytesIO(compressed.getvalue()), restored)
    assert restored.getvalue() == data


def test_output_is_zlib_format():
    compressed = io.BytesIO()
    compress_stream(io.BytesIO(SAMPLE), compressed, 9)
    assert zlib.decompress(compressed.getvalue()) == SAMPLE


def test_compression_shrinks_repetitive_data():
    compressed = io.BytesIO()
    compress_stream(io.BytesIO(SAMPLE), compressed)
    assert len(compressed.getvalue()) < len(SAMPLE)


def test_invalid_level_raises():
    with pytest.raises(ZpipeError) as info:
        compress_stream(io.BytesIO(SAMPLE), io.BytesIO(), 42)
    assert info.value.code == -2


def test_corrupt_data_raises():
    with pytest.raises(ZpipeError) as info:
        decompress_stream(io.BytesIO(b"not a zlib stream at all"), io.BytesIO())
    assert info.value.code == -3


def test_truncated_data_raises():
    compressed = zlib.compress(LARGE)
    with pytest.raises(ZpipeError):
        decompress_stream(io.BytesIO(compressed[: len(compressed) // 2]), io.BytesIO())


def test_trailing_data_after_stream_is_ignored():
    compressed = zlib.compress(SAMPLE) + b"trailing"
    restored = io.BytesIO()
    decompress_stream(io.BytesIO(compressed), restored)
    assert restored.getvalue() == SAMPLE


def test_zlib_compress_file(tmp_path):
    source = tmp_path / "molecules.smi"
    source.write_bytes(SAMPLE)
    target = tmp_path / "molecules.smi.zlib"
    zlib_compress(str(source), str(target))
    assert zlib.decompress(target.read_bytes()) == SAMPLE


def test_zlib_compress_missing_input(tmp_path):
    with pytest.raises(FileNotFoundError):
        zlib_compress(str(tmp_path / "missing.smi"), str(tmp_path / "out.zlib"))


def _patch_stdio(monkeypatch, data):
    stdin = io.TextIOWrapper(io.BytesIO(data))
    out = io.BytesIO()
    stdout = io.TextIOWrapper(out)
    monkeypatch.setattr(sys, "stdin", stdin)
    monkeypatch.setattr(sys, "stdout", stdout)
    return out


def test_main_compresses(monkeypatch):
    out = _patch_stdio(monkeypatch, SAMPLE)
    assert main([]) == 0
    assert zlib.decompress(out.getvalue()) == SAMPLE


def test_main_decompresses(monkeypatch):
    out = _patch_stdio(monkeypatch, zlib.compress(SAMPLE))
    assert main(["-d"]) == 0
    assert out.getvalue() == SAMPLE


def test_main_reports_bad_data(monkeypatch, capsys):
    _patch_stdio(monkeypatch, b"garbage")
    assert main(["-d"]) == 1
    assert "invalid or incomplete deflate data" in capsys.readouterr().err


def test_main_usage(monkeypatch, capsys):
    _patch_stdio(monkeypatch, b"")
    assert main(["-x", "y"]) == 1
    assert "zpipe usage" in capsys.readouterr().err