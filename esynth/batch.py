"""Run synthesis over every scenario archived for a protein."""

from __future__ import annotations

import glob
import os
import shutil
import subprocess
import sys
import tarfile
from typing import Callable, List, Optional, Sequence

SYNTH_EXECUTABLE = "./esynth"

Runner = Callable[[List[str]], object]


def scenario_name(file_name: str) -> str:
    """The part of an archive name before its first dot."""
    return file_name.split(".", 1)[0]


def build_synth_command(molecule_files: Sequence[str], scenario: str) -> List[str]:
    """Arguments that run synthesis on the files, writing output-<scenario>.sdf."""
    return [SYNTH_EXECUTABLE, *molecule_files, "-o", f"output-{scenario}.sdf"]


def _extract(archive: str) -> None:
    print(f"tar -xf {archive}")
    with tarfile.open(archive) as tar:
        if hasattr(tarfile, "data_filter"):
            tar.extractall(".", filter="data")
        else:
            tar.extractall(".")


def _move_molecules(directory: str) -> None:
    for path in sorted(glob.glob(os.path.join(directory, "*.sdf*"))):
        print(f"mv {path} .")
        shutil.move(path, os.path.basename(path))


def _default_runner(command: List[str]) -> object:
    return subprocess.run(command, check=False)


def run_protein(protein: str, runner: Optional[Runner] = None) -> List[List[str]]:
    """Synthesise every scenario of a protein in the current directory.

    Returns the synthesis commands that were run, in order.
    """
    run = runner or _default_runner
    results_dir = os.path.join("outputFiles", protein)
    os.makedirs(results_dir, exist_ok=True)

    _extract(os.path.join("moleculeLib", f"output-{protein}.tar"))
    protein_dir = f"output-{protein}"
    scenario_files = sorted(
        entry
        for entry in os.listdir(protein_dir)
        if os.path.isfile(os.path.join(protein_dir, entry))
    )

    commands: List[List[str]] = []
    for scenario_file in scenario_files:
        scenario = scenario_name(scenario_file)
        _extract(os.path.join(protein_dir, scenario_file))
        _move_molecules(os.path.join(scenario, "linkers"))
        _move_molecules(os.path.join(scenario, "rigids"))

        molecule_files = sorted(glob.glob("*.sdf*"))
        command = build_synth_command(molecule_files, scenario)
        print(" ".join(command))
        run(command)
        commands.append(command)

        output = f"output-{scenario}.sdf"
        if os.path.exists(output):
            destination = os.path.join(results_dir, output)
            print(f"mv {output} {destination}")
            shutil.move(output, destination)

        for path in set(molecule_files) | set(glob.glob("*.sdf")):
            if os.path.isfile(path):
                os.remove(path)
        print(f"rm -rf {scenario}")
        shutil.rmtree(scenario, ignore_errors=True)

    print(f"rm -rf {protein_dir}")
    shutil.rmtree(protein_dir, ignore_errors=True)

    archive = os.path.join("outputFiles", f"{protein}.tar.gz")
    print(f"tar -czf {archive} {results_dir}")
    with tarfile.open(archive, "w:gz") as tar:
        tar.add(results_dir, arcname=results_dir)

    last = " ".join(commands[-1]) if commands else SYNTH_EXECUTABLE
    with open("outputLog.txt", "w", encoding="utf-8") as log:
        log.write(last + "\n")

    print("Done.")
    return commands


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Process the protein named by the first argument."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("Please include the protein name to test")
        return 1
    try:
        run_protein(args[0])
    except (OSError, tarfile.TarError) as exc:
        print(f"batch: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())