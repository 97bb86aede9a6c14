"""Streamed zlib compression and decompression of files."""

from __future__ import annotations

import sys
import zlib
from typing import BinaryIO, List, Optional

CHUNK = 16384

Z_STREAM_ERROR = -2
Z_DATA_ERROR = -3


class ZpipeError(Exception):
    """A compression or decompression failure, carrying the zlib error code."""

    def __init__(self, message: str, code: int) -> None:
        super().__init__(message)
        self.code = code


def compress_stream(source: BinaryIO, dest: BinaryIO, level: int = zlib.Z_DEFAULT_COMPRESSION) -> None:
    """Compress everything readable from source into dest in zlib format."""
    try:
        compressor = zlib.compressobj(level)
    except (zlib.error, ValueError) as exc:
        raise ZpipeError("invalid compression level", Z_STREAM_ERROR) from exc
    while True:
        chunk = source.read(CHUNK)
        if not chunk:
            break
        dest.write(compressor.compress(chunk))
    dest.write(compressor.flush())


def decompress_stream(source: BinaryIO, dest: BinaryIO) -> None:
    """Decompress a zlib stream from source into dest, stopping at its end."""
    decompressor = zlib.decompressobj()
    try:
        while not decompressor.eof:
            chunk = source.read(CHUNK)
            if not chunk:
                break
            dest.write(decompressor.decompress(chunk))
    except zlib.error as exc:
        raise ZpipeError("invalid or incomplete deflate data", Z_DATA_ERROR) from exc
    if not decompressor.eof:
        raise ZpipeError("invalid or incomplete deflate data", Z_DATA_ERROR)


def zlib_compress(infile: str, outfile: str) -> None:
    """Compress the file infile into outfile."""
    with open(infile, "rb") as source, open(outfile, "wb") as dest:
        compress_stream(source, dest)


def main(argv: Optional[List[str]] = None) -> int:
    """Compress stdin to stdout, or decompress with -d."""
    args = sys.argv[1:] if argv is None else list(argv)
    source = sys.stdin.buffer
    dest = sys.stdout.buffer
    try:
        if not args:
            compress_stream(source, dest)
        elif args == ["-d"]:
            decompress_stream(source, dest)
        else:
            print("zpipe usage: zpipe [-d] < source > dest", file=sys.stderr)
            return 1
    except ZpipeError as exc:
        print(f"zpipe: {exc}", file=sys.stderr)
        return 1
    finally:
        dest.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())