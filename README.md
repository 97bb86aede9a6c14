# esynth

Building blocks for a fragment-based molecule synthesis pipeline. The package uses
only the standard library.

- `esynth.bloom`: `BloomFilter` and `CompressibleBloomFilter`, salted Bloom filters
  over strings and bytes. `BloomParameters.compute_optimal_parameters()` picks the
  number of hashes and the table size from a projected element count and a false
  positive probability. Filters with matching parameters combine with `&`, `|`
  and `^`. `CompressibleBloomFilter.compress(percentage)` folds the table into a
  smaller one.
- `esynth.fixed_sorted_list`: `FixedSortedList`, a bounded list of
  `(value, edge id)` pairs kept sorted by value. `add` raises `CapacityError`
  when the list is full. `contains` returns the stored id, or `None`.
- `esynth.fragment_graph`: `SimpleFragmentGraph`, a sorted tuple of edge ids.
  It has `copy_and_append` and `is_isomorphic_to`, which compares edge lists.
- `esynth.edge`: the `EdgeAnnotation` and `EdgeAggregator` records.
- `esynth.timed`: `TimedHashMap`, a string set that holds at most
  `absolute_bound` entries. When it is full it keeps only the newest
  `relative_bound` entries. `TimedLikeValueContainer` is its bucket type, and
  `djb2_hash` is the hash it uses.
- `esynth.utilities`: `norm_pdf`, `cauchy_pdf`, `logistic_pdf`, `wald_pdf` and
  `laplace_pdf`; the helpers `log2`, `num_binary_bits`, `make_string` and
  `contains_false`; the stream helpers `eat_white_lines` and
  `eat_white_to_newline_or_char`; and `does_directory_exist`, `make_directory`
  and `clean_directory`.
- `esynth.zpipe`: `compress_stream`, `decompress_stream` and
  `zlib_compress(infile, outfile)`. Failures raise `ZpipeError`, which carries
  the zlib error code.
- `esynth.options`: `Options`, the settings of a synthesis run.
  - `parse_command_line()` reads `-o`, `-v`, `-tc`, `-mw`, `-sa`, `-hd`, `-ha`,
    `-lp`, `-hl`, `-prob-level`, `-pool`, `-smi-only`, `-serial`, `-threaded`,
    `-nopen`, `-odir` and `-lip`. A value may be attached to its option (`-tc0.9`)
    or given as the next argument (`-tc 0.9`).
  - Arguments that do not start with `-` are collected as input files.
  - `analyze_environment()` reads `COMPLIANT_WRITER` and `SHM_PATH`.
  - Unknown options, missing values and bad environment settings raise
    `OptionsError`.
- `esynth.batch`: runs a synthesis executable over every scenario archived for
  a protein.

## Installation

```
pip install .
```

## Example

```python
from esynth.bloom import BloomParameters, BloomFilter

params = BloomParameters()
params.projected_element_count = 1000
params.false_positive_probability = 0.001
params.compute_optimal_parameters()

seen = BloomFilter(params)
seen.insert("CCO")
assert "CCO" in seen
```

## Commands

Compress standard input to standard output with zlib. Add `-d` to decompress:

```
esynth-zpipe < molecules.smi > molecules.smi.zlib
esynth-zpipe -d < molecules.smi.zlib > molecules.smi
```

Run synthesis over every scenario of a protein:

```
esynth-batch <protein-name>
```

`esynth-batch` works in the current directory, in these steps:

1. It unpacks `moleculeLib/output-<protein>.tar`.
2. It unpacks each scenario archive found in `output-<protein>/`.
3. It moves the scenario's `linkers/*.sdf*` and `rigids/*.sdf*` files into the
   current directory.
4. It runs `./esynth <files> -o output-<scenario>.sdf`.
5. It moves each result into `outputFiles/<protein>/`.
6. It packs that directory into `outputFiles/<protein>.tar.gz`.
7. It writes the last command it ran to `outputLog.txt`.

## What this package does not do

The package holds the data structures, option handling, compression and batch
driving around a synthesizer. It does not contain the synthesizer itself: it
cannot combine fragments into molecules or check Lipinski compliance, and it
cannot read, write, convert or generate 3D coordinates for SDF or SMILES
molecules. `esynth-batch` expects an `./esynth` executable to be present and
does not provide one.

## Tests

```
pip install .[test]
pytest
```