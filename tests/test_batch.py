import io
import os
import tarfile

import pytest

from esynth.batch import build_synth_command, main, run_protein, scenario_name


def _add_bytes(tar, name, data):
    info = tarfile.TarInfo(name)
    info.size = len(data)
    tar.addfile(info, io.BytesIO(data))


def _scenario_tar(files):
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w") as tar:
        for name, data in files.items():
            _add_bytes(tar, name, data)
    return buffer.getvalue()


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "moleculeLib").mkdir()
    scen1 = _scenario_tar(
        {"scen1/linkers/link.sdf": b"L", "scen1/rigids/rigid.sdf": b"R"}
    )
    scen2 = _scenario_tar({"scen2/rigids/only.sdf": b"O"})
    with tarfile.open(tmp_path / "moleculeLib" / "output-prot.tar", "w") as tar:
        _add_bytes(tar, "output-prot/scen1.tar", scen1)
        _add_bytes(tar, "output-prot/scen2.tar", scen2)
    return tmp_path


class FakeSynth:
    def __init__(self):
        self.calls = []
        self.seen_files = []

    def __call__(self, command):
        self.calls.append(command)
        self.seen_files.append(sorted(p for p in os.listdir(".") if ".sdf" in p))
        out = command[command.index("-o") + 1]
        with open(out, "w") as handle:
            handle.write("result")


def test_scenario_name():
    assert scenario_name("scen1.tar") == "scen1"
    assert scenario_name("a.b.tar") == "a"
    assert scenario_name("plain") == "plain"


def test_build_synth_command():
    assert build_synth_command(["a.sdf", "b.sdf"], "s") == [
        "./esynth", "a.sdf", "b.sdf", "-o", "output-s.sdf"
    ]


def test_run_protein_runs_every_scenario(workspace):
    synth = FakeSynth()
    commands = run_protein("prot", synth)
    assert commands == synth.calls
    assert commands[0] == build_synth_command(["link.sdf", "rigid.sdf"], "scen1")
    assert commands[1] == build_synth_command(["only.sdf"], "scen2")
    assert synth.seen_files[1] == ["only.sdf"]


def test_run_protein_collects_and_cleans(workspace):
    commands = run_protein("prot", FakeSynth())
    assert len(commands) == 2
    assert [command[-1] for command in commands] == [
        "output-scen1.sdf",
        "output-scen2.sdf",
    ]
    results = workspace / "outputFiles" / "prot"
    assert (results / "output-scen1.sdf").read_text() == "result"
    assert (results / "output-scen2.sdf").read_text() == "result"
    assert not (workspace / "output-prot").exists()
    assert not (workspace / "scen1").exists()
    assert not (workspace / "link.sdf").exists()
    assert not (workspace / "only.sdf").exists()


def test_run_protein_archives_results(workspace):
    commands = run_protein("prot", FakeSynth())
    assert len(commands) == 2
    with tarfile.open(workspace / "outputFiles" / "prot.tar.gz") as tar:
        names = tar.getnames()
    for command in commands:
        assert "outputFiles/prot/" + command[-1] in names
    assert "outputFiles/prot/output-scen1.sdf" in names
    assert "outputFiles/prot/output-scen2.sdf" in names


def test_run_protein_logs_last_command(workspace):
    commands = run_protein("prot", FakeSynth())
    log = (workspace / "outputLog.txt").read_text()
    assert log == " ".join(commands[-1]) + "\n"


def test_main_without_arguments():
    assert main([]) == 1


def test_main_missing_archive(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["absent"]) == 1