"""Command-line options and environment settings for a synthesis run."""

from __future__ import annotations

import os
import re
import sys
from typing import Callable, List, Optional, Sequence

COMPLIANT_EXE = "compliantwriter"

_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"\s*[+-]?\d+")


class OptionsError(Exception):
    """An unknown option, a missing option value or a bad environment setting."""


def _atof(text: str) -> float:
    """Parse the longest numeric prefix of text as a float; 0.0 if there is none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(0)) if match else 0.0


def _atoi(text: str) -> int:
    """Parse the longest integer prefix of text; 0 if there is none."""
    match = _INT_PREFIX.match(text)
    return int(match.group(0)) if match else 0


# Options that take a value, either attached ("-tc0.9") or as the next argument.
_VALUE_OPTIONS: Sequence[tuple[str, str, Callable[[str], object]]] = (
    ("-tc", "tanimoto", _atof),
    ("-mw", "molwt_upper_bound", _atof),
    ("-sa", "sa_threshold", _atof),
    ("-hd", "hbd_upper_bound", _atof),
    ("-ha", "hba1_upper_bound", _atof),
    ("-lp", "logp_upper_bound", _atof),
    ("-hl", "hierarchical_level_bound", _atoi),
    ("-prob-level", "probability_prune_level_start", _atoi),
    ("-pool", "obgen_thread_pool_size", _atoi),
)


def acquire_environment_path(variable: str, suffix: str = "") -> str:
    """Return the directory named by an environment variable, with a trailing '/'.

    The directory joined with suffix must exist; OptionsError otherwise.
    """
    path = os.environ.get(variable)
    if not path:
        raise OptionsError(f"{variable} environment variable not specified.")
    print(f"{variable} environmental path: {path}", file=sys.stderr)
    if not path.endswith("/"):
        path += "/"
    target = path + suffix
    if not os.path.exists(target):
        raise OptionsError(f"Specified path: {target} does not exist.")
    return path


class Options:
    """Settings for a run, filled from the command line and the environment."""

    def __init__(self, argv: Optional[Sequence[str]] = None) -> None:
        self.argv: List[str] = list(sys.argv[1:] if argv is None else argv)

        self.out_file = "molecules.sdf"
        self.out_file_smi = "molecules.smi"
        self.validation_file = ""
        self.validate = False
        self.in_files: List[str] = []

        self.writer_path = "./"
        self.shm_path = "/run/shm"

        self.tanimoto = 0.95
        self.threaded = False
        self.serial = True
        self.openbabel = True
        self.smi_only = False
        self.use_lipinski = False
        self.obgen_thread_pool_size = 15
        self.probability_prune_level_start = 5
        self.output_dir_suffix = ""

        self.sa_threshold = 5.0
        self.molwt_upper_bound = 570.0
        self.hbd_upper_bound = 5.0
        self.hba1_upper_bound = 10.0
        self.logp_upper_bound = 7.2
        self.hierarchical_level_bound: Optional[int] = None

        self.python_module_name = ""
        self.python_function_name = ""

    def parse_command_line(self) -> None:
        """Apply every option; other arguments are collected as input files."""
        index = 0
        while index < len(self.argv):
            argument = self.argv[index]
            if argument.startswith("-"):
                index = self._handle_option(index)
            else:
                self.in_files.append(argument)
            index += 1

    def _next_value(self, index: int) -> str:
        if index + 1 >= len(self.argv):
            raise OptionsError(
                f"Specified option {self.argv[index]} not followed by the option value."
            )
        return self.argv[index + 1]

    def _handle_option(self, index: int) -> int:
        """Apply the option at index and return the index of its last argument."""
        option = self.argv[index]

        if option == "-o":
            self.out_file = self._next_value(index)
            return index + 1
        if option == "-v":
            self.validate = True
            self.validation_file = self._next_value(index)
            return index + 1

        for name, attribute, convert in _VALUE_OPTIONS:
            if option.startswith(name):
                if option == name:
                    setattr(self, attribute, convert(self._next_value(index)))
                    return index + 1
                setattr(self, attribute, convert(option[len(name):]))
                return index

        if option.startswith("-smi-only"):
            self.smi_only = True
            return index
        if option.startswith("-serial"):
            self.threaded = False
            self.serial = True
            return index
        if option.startswith("-threaded"):
            self.threaded = True
            self.serial = False
            return index
        if option.startswith("-nopen"):
            self.openbabel = False
            return index
        if option.startswith("-odir"):
            if option == "-odir":
                self.output_dir_suffix = self._next_value(index)
                return index + 1
            return index
        if option.startswith("-lip"):
            if option == "-lip":
                self.use_lipinski = True
            return index

        raise OptionsError(f"Unknown option: {option}")

    def analyze_environment(self) -> None:
        """Read COMPLIANT_WRITER and SHM_PATH; OptionsError lists any that failed."""
        problems: List[str] = []
        try:
            self.writer_path = acquire_environment_path("COMPLIANT_WRITER", COMPLIANT_EXE)
        except OptionsError as exc:
            self.writer_path = ""
            problems.append(str(exc))
        try:
            self.shm_path = acquire_environment_path("SHM_PATH", "")
        except OptionsError as exc:
            self.shm_path = ""
            problems.append(str(exc))
        if problems:
            raise OptionsError("; ".join(problems))