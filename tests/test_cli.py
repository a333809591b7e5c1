import struct
from pathlib import Path

import pytest

from pcb_scheduler.cli import main


@pytest.fixture
def pcb_file(tmp_path: Path) -> Path:
    p = tmp_path / "pcbs.bin"
    # burst, priority, arrival
    p.write_bytes(struct.pack("=I", 2) + struct.pack("=III", 6, 2, 0) + struct.pack("=III", 2, 1, 2))
    return p


def test_run_srt(pcb_file: Path, capsys):
    assert main(["run", str(pcb_file), "SRT"]) == 0
    out = capsys.readouterr().out
    assert "Average Waiting Time: 0.00" in out
    assert "Average Turnaround Time: 5.00" in out
    assert "Total Run Time: 8" in out


def test_run_rr_with_quantum(pcb_file: Path, capsys):
    assert main(["run", str(pcb_file), "RR", "2"]) == 0
    assert "Total Run Time: 8" in capsys.readouterr().out


def test_run_rr_requires_quantum(pcb_file: Path, capsys):
    assert main(["run", str(pcb_file), "RR"]) == 1
    assert main(["run", str(pcb_file), "RR", "0"]) == 1
    assert "quantum" in capsys.readouterr().err


def test_run_unknown_algorithm_and_missing_file(pcb_file: Path, tmp_path: Path):
    assert main(["run", str(pcb_file), "LOTTERY"]) == 1
    assert main(["run", str(tmp_path / "missing.bin"), "FCFS"]) == 1


def test_compare(pcb_file: Path, capsys):
    assert main(["compare", str(pcb_file), "--quantum", "3"]) == 0
    out = capsys.readouterr().out
    assert "Round" in out
    assert "SRT" in out
    assert "FCFS" in out


def test_convert_then_run(tmp_path: Path, capsys):
    workload = tmp_path / "w.json"
    workload.write_text('[{"arrival_time":0,"burst_time":4,"priority":2},'
                        '{"arrival_time":0,"burst_time":3,"priority":1}]')
    out_file = tmp_path / "w.bin"
    assert main(["convert", str(workload), str(out_file)]) == 0
    assert out_file.stat().st_size == 4 + 2 * 12

    assert main(["run", str(out_file), "P"]) == 0
    out = capsys.readouterr().out
    assert "Average Waiting Time: 1.50" in out
    assert "Total Run Time: 7" in out


def test_convert_invalid_utf8_exits_nonzero(tmp_path: Path, capsys):
    workload = tmp_path / "w.csv"
    workload.write_bytes(b"arrival_time,burst_time\n0,\xff\xfe3\n")
    assert main(["convert", str(workload), str(tmp_path / "w.bin")]) == 1
    assert "UTF-8" in capsys.readouterr().err


def test_markup_in_paths_is_printed_literally(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["run", "[/]missing.bin", "FCFS"]) == 1
    assert "[/]" in capsys.readouterr().err
