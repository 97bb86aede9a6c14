"""Numeric helpers, stream scanning, probability densities and directory handling."""

from __future__ import annotations

import math
import os
import stat
import sys
from typing import Iterable, TextIO


def log2(value: float) -> float:
    """Base-2 logarithm; 0 for values that are not positive."""
    if value <= 0:
        return 0.0
    return math.log10(value) / math.log10(2.0)


def num_binary_bits(value: int) -> int:
    """Number of binary digits needed to write a non-negative integer (at least 1)."""
    if value < 0:
        raise ValueError("value must be non-negative")
    return max(int(value).bit_length(), 1)


def make_string(label: str, value: object) -> str:
    """Join a label and a value as 'label: value'."""
    return f"{label}: {value}"


def _peek(stream: TextIO) -> str:
    position = stream.tell()
    char = stream.read(1)
    stream.seek(position)
    return char


def eat_white_lines(stream: TextIO) -> None:
    """Skip every line that starts with whitespace, newline included."""
    while True:
        char = _peek(stream)
        if not char or not char.isspace():
            return
        while True:
            consumed = stream.read(1)
            if not consumed or consumed == "\n":
                break


def eat_white_to_newline_or_char(stream: TextIO) -> None:
    """Consume alphanumeric characters up to the first other character."""
    while True:
        char = _peek(stream)
        if not char or char == "\n" or not (char.isascii() and char.isalnum()):
            return
        stream.read(1)


def contains_false(values: Iterable[bool]) -> bool:
    """True if any element of the sequence is false."""
    return any(not value for value in values)


def norm_pdf(x: float, loc: float, scale: float) -> float:
    """Density of the normal distribution."""
    norm = 1.0 / (scale * math.sqrt(2.0 * math.pi))
    return norm * math.exp(-((x - loc) ** 2) / (2.0 * scale * scale))


def cauchy_pdf(x: float, loc: float, scale: float) -> float:
    """Density of the Cauchy distribution."""
    z = (x - loc) / scale
    return (1.0 / (math.pi * scale)) * (1.0 / (1.0 + z * z))


def logistic_pdf(x: float, loc: float, scale: float) -> float:
    """Density of the logistic distribution."""
    # The density is symmetric, so |z| avoids overflow in the exponential.
    e_power = math.exp(-abs((x - loc) / scale))
    return (1.0 / scale) * e_power / (1.0 + e_power) ** 2


def wald_pdf(x: float, loc: float, scale: float) -> float:
    """Density of the standard Wald distribution, shifted and scaled."""
    normed = (x - loc) / scale
    if normed < 0:
        return 0.00000001
    if normed == 0:
        return 0.0
    norm = 1.0 / (math.sqrt(2.0 * math.pi * normed**3) * scale)
    return norm * math.exp(-((normed - 1.0) ** 2) / (2.0 * normed))


def laplace_pdf(x: float, loc: float, scale: float) -> float:
    """Density of the Laplace distribution."""
    return (1.0 / (2.0 * scale)) * math.exp(-abs(x - loc) / scale)


def does_directory_exist(path: str | os.PathLike) -> bool:
    """True if the path names a directory; OSError on failures other than absence."""
    try:
        info = os.stat(path)
    except FileNotFoundError:
        return False
    if stat.S_ISDIR(info.st_mode):
        return True
    print(f"Output directory {os.fspath(path)} exists, but is not a directory", file=sys.stderr)
    return False


def clean_directory(path: str | os.PathLike) -> None:
    """Remove the files and empty sub-directories directly inside a directory."""
    if not does_directory_exist(path):
        return
    print(f"Cleaning output directory: {os.fspath(path)}")
    with os.scandir(path) as entries:
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    os.rmdir(entry.path)
                else:
                    os.remove(entry.path)
            except OSError:
                pass


def make_directory(path: str | os.PathLike) -> None:
    """Create the directory if needed and make it readable and writable by all."""
    if not does_directory_exist(path):
        os.mkdir(path, 0o777)
        print(f"Creating output directory: {os.fspath(path)}")
    os.chmod(path, 0o777)