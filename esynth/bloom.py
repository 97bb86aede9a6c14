"""Bloom filters with salted AP hashing and an optional compressible variant."""

from __future__ import annotations

import copy as _copy
import math
import struct
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

BITS_PER_CHAR = 8
_BIT_MASK = tuple(1 << bit for bit in range(BITS_PER_CHAR))
_U32 = 0xFFFFFFFF
_U64 = 0xFFFFFFFFFFFFFFFF

_PREDEFINED_SALTS = (
    0xAAAAAAAA, 0x55555555, 0x33333333, 0xCCCCCCCC,
    0x66666666, 0x99999999, 0xB5B5B5B5, 0x4B4B4B4B,
    0xAA55AA55, 0x55335533, 0x33CC33CC, 0xCC66CC66,
    0x66996699, 0x99B599B5, 0xB54BB54B, 0x4BAA4BAA,
    0xAA33AA33, 0x55CC55CC, 0x33663366, 0xCC99CC99,
    0x66B566B5, 0x994B994B, 0xB5AAB5AA, 0xAAAAAA33,
    0x555555CC, 0x33333366, 0xCCCCCC99, 0x666666B5,
    0x9999994B, 0xB5B5B5AA, 0xFFFFFFFF, 0xFFFF0000,
    0xB823D5EB, 0xC1191CDF, 0xF623AEB3, 0xDB58499F,
    0xC8D42E70, 0xB173F616, 0xA91A5967, 0xDA427D63,
    0xB1E8A2EA, 0xF6C0D155, 0x4909FEA3, 0xA68CC6A7,
    0xC395E782, 0xA26057EB, 0x0CD5DA28, 0x467C5492,
    0xF15E6982, 0x61C6FAD3, 0x9615E352, 0x6E9E355A,
    0x689B563E, 0x0C9831A8, 0x6753C18B, 0xA622689B,
    0x8CA63C47, 0x42CC2884, 0x8E89919B, 0x6EDBD7D3,
    0x15B6796C, 0x1D6FDFE4, 0x63FF9092, 0xE7401432,
    0xEFFE9412, 0xAEAEDF79, 0x9F245A31, 0x83C136FC,
    0xC3DA4A8C, 0xA5112C8C, 0x5271F491, 0x9A948DAB,
    0xCEE59A8D, 0xB5F525AB, 0x59D13217, 0x24E7C331,
    0x697C2103, 0x84B0A460, 0x86156DA9, 0xAEF2AC68,
    0x23243DA5, 0x3F649643, 0x5FA495A8, 0x67710DF8,
    0x9A6C499E, 0xDCFB0227, 0x46A43433, 0x1832B07A,
    0xC46AFF3C, 0xB9C8FFF0, 0xC9500467, 0x34431BDF,
    0xB652432B, 0xE367F12B, 0x427F4C1B, 0x224C006E,
    0x2E7E5A89, 0x96F99AA5, 0x0BEB452A, 0x2FD87C39,
    0x74B2E1FB, 0x222EFD24, 0xF357F60C, 0x440FCB1E,
    0x8BBE030F, 0x6704DC29, 0x1144D12F, 0x948B1355,
    0x6D8FD7E9, 0x1C11A014, 0xADD1592F, 0xFB3C712E,
    0xFC77642F, 0xF9C4CE8C, 0x31312FB9, 0x08B0DD79,
    0x318FA6E7, 0xC040D23D, 0xC0589AA7, 0x0CA5C075,
    0xF874B172, 0x0CF914D5, 0x784D3280, 0x4E8CFEBC,
    0xC569F575, 0xCDB2A091, 0x2CC016B4, 0x5C5F4421,
)

Key = Union[str, bytes, bytearray, memoryview]


def _to_bytes(key: Key) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    raise TypeError(f"unsupported key type: {type(key).__name__}")


@dataclass
class OptimalParameters:
    """Hash count and table size (in bits) chosen for a filter."""

    number_of_hashes: int = 0
    table_size: int = 0


@dataclass
class BloomParameters:
    """Requirements for a filter and the optimal sizes derived from them."""

    minimum_size: int = 1
    maximum_size: int = _U64
    minimum_number_of_hashes: int = 1
    maximum_number_of_hashes: int = _U32
    projected_element_count: int = 10000
    false_positive_probability: Optional[float] = None
    random_seed: int = 0xA5A5A5A55A5A5A5A
    optimal_parameters: OptimalParameters = field(default_factory=OptimalParameters)

    def __post_init__(self) -> None:
        if self.false_positive_probability is None:
            if self.projected_element_count:
                self.false_positive_probability = 1.0 / self.projected_element_count
            else:
                self.false_positive_probability = math.inf

    def is_valid(self) -> bool:
        """True when the requirements are consistent."""
        fpp = self.false_positive_probability
        return not (
            self.minimum_size > self.maximum_size
            or self.minimum_number_of_hashes > self.maximum_number_of_hashes
            or self.minimum_number_of_hashes < 1
            or self.maximum_number_of_hashes == 0
            or self.projected_element_count == 0
            or fpp < 0.0
            or math.isinf(fpp)
            or self.random_seed == 0
            or self.random_seed == _U64
        )

    def compute_optimal_parameters(self) -> bool:
        """Find the hash count and bit count meeting the requirements."""
        if not self.is_valid():
            return False
        fpp = self.false_positive_probability
        if not 0.0 < fpp < 1.0:
            return False

        min_m = math.inf
        min_k = 0.0
        k = 1.0
        while k < 1000.0:
            numerator = -k * self.projected_element_count
            denominator = math.log(1.0 - fpp ** (1.0 / k))
            if denominator < 0.0:
                current = numerator / denominator
                if current < min_m:
                    min_m = current
                    min_k = k
            k += 1.0
        if math.isinf(min_m):
            return False

        hashes = int(min_k)
        table_size = int(min_m)
        remainder = table_size % BITS_PER_CHAR
        if remainder:
            table_size += BITS_PER_CHAR - remainder

        hashes = min(max(hashes, self.minimum_number_of_hashes), self.maximum_number_of_hashes)
        table_size = min(max(table_size, self.minimum_size), self.maximum_size)
        self.optimal_parameters = OptimalParameters(hashes, table_size)
        return True


class _LibcRandom:
    """The additive-feedback generator behind the C library's srand/rand."""

    def __init__(self, seed: int) -> None:
        seed &= _U32
        word = seed - (1 << 32) if seed >= 1 << 31 else seed
        if word == 0:
            word = 1
        state = [word]
        for _ in range(30):
            hi = abs(word) // 127773 * (1 if word >= 0 else -1)
            lo = word - hi * 127773
            word = 16807 * lo - 2836 * hi
            if word < 0:
                word += 2147483647
            state.append(word)
        state.extend(state[:3])
        self._state = [value & _U32 for value in state]
        for _ in range(310):
            self._step()

    def _step(self) -> int:
        value = (self._state[-31] + self._state[-3]) & _U32
        self._state.append(value)
        del self._state[0]
        return value

    def rand(self) -> int:
        return self._step() >> 1


def _hash_ap(data: bytes, hash_value: int) -> int:
    h = hash_value & _U32
    full = len(data) - len(data) % 8
    for i1, i2 in struct.iter_unpack("<II", data[:full]):
        mixed = ((h << 7) & _U32) ^ ((i1 * (h >> 3)) & _U32)
        mixed ^= ~(((h << 11) + (i2 ^ (h >> 5))) & _U32) & _U32
        h = (h ^ mixed) & _U32

    rest = data[full:]
    loop = 0
    if rest:
        if len(rest) >= 4:
            (i,) = struct.unpack_from("<I", rest)
            h = (h ^ (~(((h << 11) + (i ^ (h >> 5))) & _U32) & _U32)) & _U32
            loop += 1
            rest = rest[4:]
        if len(rest) >= 2:
            (i,) = struct.unpack_from("<H", rest)
            if loop & 1:
                h = (h ^ (((h << 7) & _U32) ^ ((i * (h >> 3)) & _U32))) & _U32
            else:
                h = (h ^ (~(((h << 11) + (i ^ (h >> 5))) & _U32) & _U32)) & _U32
            loop += 1
            rest = rest[2:]
        if rest:
            h = (h + ((rest[0] ^ ((h * 0xA5A5A5A5) & _U32)) + loop)) & _U32
    return h


class BloomFilter:
    """A probabilistic set of byte strings."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, parameters: BloomParameters) -> None:
        self._projected_element_count = parameters.projected_element_count
        self._inserted = 0
        self._random_seed = (parameters.random_seed * 0xA5A5A5A5 + 1) & _U64
        self.desired_false_positive_probability = parameters.false_positive_probability
        self._salt_count = parameters.optimal_parameters.number_of_hashes
        self._table_size = parameters.optimal_parameters.table_size
        self._salts = self._generate_salts()
        self._bits = bytearray(self._table_size // BITS_PER_CHAR)

    def _generate_salts(self) -> List[int]:
        if self._salt_count <= len(_PREDEFINED_SALTS):
            salts = list(_PREDEFINED_SALTS[: self._salt_count])
            seed_low = self._random_seed & _U32
            for index in range(len(salts)):
                partner = salts[(index + 3) % len(salts)]
                salts[index] = (salts[index] * partner + seed_low) & _U32
            return salts

        salts = list(_PREDEFINED_SALTS)
        seen = set(salts)
        generator = _LibcRandom(self._random_seed)
        while len(salts) < self._salt_count:
            candidate = (generator.rand() * generator.rand()) & _U32
            if candidate and candidate not in seen:
                seen.add(candidate)
                salts.append(candidate)
        return salts

    def _bit_index(self, hash_value: int) -> int:
        return hash_value % self._table_size

    def _positions(self, key: Key):
        data = _to_bytes(key)
        for salt in self._salts:
            bit_index = self._bit_index(_hash_ap(data, salt))
            yield bit_index // BITS_PER_CHAR, _BIT_MASK[bit_index % BITS_PER_CHAR]

    def insert(self, key: Key) -> None:
        """Add a key."""
        for byte_index, mask in self._positions(key):
            self._bits[byte_index] |= mask
        self._inserted += 1

    def insert_all(self, keys: Iterable[Key]) -> None:
        """Add every key of an iterable."""
        for key in keys:
            self.insert(key)

    def contains(self, key: Key) -> bool:
        """True if the key may have been inserted; False if it surely was not."""
        return all(self._bits[byte_index] & mask for byte_index, mask in self._positions(key))

    def __contains__(self, key: Key) -> bool:
        return self.contains(key)

    def contains_all(self, keys: Iterable[Key]) -> Optional[Key]:
        """Return the first key not contained, or None if all are."""
        return next((key for key in keys if not self.contains(key)), None)

    def contains_none(self, keys: Iterable[Key]) -> Optional[Key]:
        """Return the first key contained, or None if none are."""
        return next((key for key in keys if self.contains(key)), None)

    def clear(self) -> None:
        """Reset all bits and the insertion count."""
        self._bits = bytearray(len(self._bits))
        self._inserted = 0

    def size(self) -> int:
        """Table size in bits."""
        return self._table_size

    def element_count(self) -> int:
        return self._inserted

    def hash_count(self) -> int:
        return len(self._salts)

    def effective_fpp(self) -> float:
        """False positive probability given the keys inserted so far."""
        k = float(len(self._salts))
        return (1.0 - math.exp(-1.0 * k * self._inserted / self.size())) ** k

    def table(self) -> bytes:
        return bytes(self._bits)

    def copy(self) -> "BloomFilter":
        clone = _copy.copy(self)
        clone._bits = bytearray(self._bits)
        clone._salts = list(self._salts)
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BloomFilter):
            return NotImplemented
        if self is other:
            return True
        return (
            self._salt_count == other._salt_count
            and self._table_size == other._table_size
            and len(self._bits) == len(other._bits)
            and self._projected_element_count == other._projected_element_count
            and self._inserted == other._inserted
            and self._random_seed == other._random_seed
            and self.desired_false_positive_probability
            == other.desired_false_positive_probability
            and self._salts == other._salts
            and self._bits == other._bits
        )

    def _compatible(self, other: "BloomFilter") -> bool:
        return (
            self._salt_count == other._salt_count
            and self._table_size == other._table_size
            and self._random_seed == other._random_seed
        )

    def _combine(self, other: "BloomFilter", op) -> "BloomFilter":
        if self._compatible(other):
            self._bits = bytearray(op(a, b) for a, b in zip(self._bits, other._bits))
        return self

    def __iand__(self, other: "BloomFilter") -> "BloomFilter":
        return self._combine(other, lambda a, b: a & b)

    def __ior__(self, other: "BloomFilter") -> "BloomFilter":
        return self._combine(other, lambda a, b: a | b)

    def __ixor__(self, other: "BloomFilter") -> "BloomFilter":
        return self._combine(other, lambda a, b: a ^ b)

    def __and__(self, other: "BloomFilter") -> "BloomFilter":
        result = self.copy()
        result &= other
        return result

    def __or__(self, other: "BloomFilter") -> "BloomFilter":
        result = self.copy()
        result |= other
        return result

    def __xor__(self, other: "BloomFilter") -> "BloomFilter":
        result = self.copy()
        result ^= other
        return result

    def __bool__(self) -> bool:
        return self._table_size != 0


class CompressibleBloomFilter(BloomFilter):
    """A bloom filter whose table can be folded into a smaller one."""

    def __init__(self, parameters: BloomParameters) -> None:
        super().__init__(parameters)
        self._size_list = [self._table_size]

    def size(self) -> int:
        return self._size_list[-1]

    def copy(self) -> "CompressibleBloomFilter":
        clone = super().copy()
        clone._size_list = list(self._size_list)
        return clone

    def _bit_index(self, hash_value: int) -> int:
        bit_index = hash_value
        for size in self._size_list:
            bit_index %= size
        return bit_index

    def compress(self, percentage: float) -> bool:
        """Shrink the table by the given percentage; False if not possible."""
        if percentage <= 0.0 or percentage >= 100.0:
            return False

        original = self._size_list[-1]
        new_size = int(original * (1.0 - percentage / 100.0))
        new_size -= new_size % BITS_PER_CHAR
        if new_size < BITS_PER_CHAR or new_size >= original:
            return False

        self.desired_false_positive_probability = self.effective_fpp()
        new_bytes = new_size // BITS_PER_CHAR
        folded = bytearray(self._bits[:new_bytes])
        for offset, value in enumerate(self._bits[new_bytes : original // BITS_PER_CHAR]):
            folded[offset % new_bytes] |= value
        self._bits = folded
        self._size_list.append(new_size)
        return True