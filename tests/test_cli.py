import json

import pytest

from primebench import cli, config
from primebench.cli import CLI
from primebench.counting import Chunk
from primebench.error import WorkerError


@pytest.fixture
def processors(monkeypatch):
    monkeypatch.setattr(config, 'cpu_count', lambda: 3)
    return 3


@pytest.fixture
def input_file(tmp_path):
    path = tmp_path / "numbers.txt"
    path.write_text("2 3 4 5 91 17\n1, 0, -7, abc 999999999999999999999\n", encoding='utf-8')
    return str(path)


def _lines(capsys):
    out, err = capsys.readouterr()
    return out.splitlines(), err


def test_no_arguments_prints_usage(capsys):
    assert CLI().run([]) == 0

    out, err = capsys.readouterr()
    assert out.startswith("usage: primebench")
    assert "input-file" in out
    assert err == ""


def test_run(capsys, input_file):
    assert CLI().run([input_file, "2"]) == 0

    lines, err = _lines(capsys)
    assert lines[0] == f"Input file: {input_file}"
    assert lines[1] == "Total numbers parsed: 9"
    assert lines[2] == ""
    assert lines[3] == "Single-thread:"
    assert lines[4] == "  Prime count: 4"
    assert lines[5].startswith("  Elapsed time: ") and lines[5].endswith(" ms")
    assert lines[6] == ""
    assert lines[7] == "Multi-thread (2 threads):"
    assert lines[8] == "  Prime count: 4"
    assert lines[9].startswith("  Elapsed time: ") and lines[9].endswith(" ms")
    assert len(lines) == 10
    assert "Warning" not in "\n".join(lines)
    assert err == ""


@pytest.mark.parametrize('threads, expected', [
    ("0", 1),
    ("-5", 1),
    ("abc", 3),
    (None, 3),
    ("64", 64),
])
def test_thread_count_argument(capsys, processors, input_file, threads, expected):
    argv = [input_file] if threads is None else [input_file, threads]

    assert CLI().run(argv) == 0

    lines, _ = _lines(capsys)
    assert f"Multi-thread ({expected} threads):" in lines
    assert lines.count("  Prime count: 4") == 2


def test_elapsed_time_has_three_decimals(capsys, input_file):
    CLI().run([input_file, "2"])

    lines, _ = _lines(capsys)
    value = lines[5].split(":")[1].strip().split()[0]
    assert len(value.split(".")[1]) == 3


def test_empty_input(capsys, tmp_path, monkeypatch):
    path = tmp_path / "empty.txt"
    path.write_text("no numbers here", encoding='utf-8')

    def fail(*args, **kwargs):
        raise AssertionError("Counting performed.")

    monkeypatch.setattr(cli, 'compare', fail)

    assert CLI().run([str(path)]) == 0

    out, err = capsys.readouterr()
    assert out == f"No numbers found in file: {path}\n"
    assert err == ""


def test_missing_input(capsys, tmp_path):
    path = tmp_path / "missing.txt"

    assert CLI().run([str(path)]) == 1

    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("Failed to read file: ")
    assert "No such file" in err


def test_worker_failure(capsys, monkeypatch, input_file):
    def fail(*args, **kwargs):
        cause = RuntimeError("boom")
        raise WorkerError(Chunk(0, 5), cause) from cause

    monkeypatch.setattr(cli, 'compare', fail)

    assert CLI().run([input_file, "2"]) == 1

    lines, err = _lines(capsys)
    assert lines[0] == f"Input file: {input_file}"
    assert err.startswith("Worker task failed: ")
    assert "boom" in err


def test_interrupted(capsys, monkeypatch, input_file):
    def interrupt(*args, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(cli, 'compare', interrupt)

    assert CLI().run([input_file]) == 130

    _, err = capsys.readouterr()
    assert err == "Execution interrupted.\n"


def test_invalid_repeat(input_file):
    with pytest.raises(SystemExit) as excinfo:
        CLI().run([input_file, "-r", "0"])

    assert excinfo.value.code == 2


def test_repeat(capsys, input_file):
    assert CLI().run([input_file, "2", "--repeat", "3"]) == 0

    lines, _ = _lines(capsys)
    assert lines.count("  Runs: 3 (median shown)") == 2


def test_output_and_history(capsys, tmp_path, input_file):
    output = tmp_path / "result.json"
    history = tmp_path / "history.csv"

    argv = [input_file, "2", "-o", str(output), "--history", str(history)]
    assert CLI().run(argv) == 0
    assert CLI().run(argv) == 0

    result = json.loads(output.read_text(encoding='utf-8'))
    assert result['input'] == input_file
    assert result['total_numbers'] == 9
    assert result['threads'] == 2
    assert result['executor'] == 'thread'
    assert result['sequential']['count'] == result['parallel']['count'] == 4
    assert result['match'] is True
    assert result['system']['cpu']['logical_count'] >= 1

    assert len(history.read_text(encoding='utf-8').splitlines()) == 3


def test_config_file(capsys, tmp_path, input_file):
    path = tmp_path / "bench.yaml"
    path.write_text("threads: 5\nrepeat: 2\noutput: out.json\n", encoding='utf-8')

    assert CLI().run([input_file, "-c", str(path)]) == 0

    lines, _ = _lines(capsys)
    assert "Multi-thread (5 threads):" in lines
    result = json.loads((tmp_path / "out.json").read_text(encoding='utf-8'))
    assert result['repeat'] == 2


def test_arguments_override_config_file(capsys, tmp_path, input_file):
    path = tmp_path / "bench.yaml"
    path.write_text("threads: 5\nexecutor: thread\n", encoding='utf-8')

    assert CLI().run([input_file, "2", "-c", str(path), "-e", "process"]) == 0

    lines, _ = _lines(capsys)
    assert "Multi-thread (2 threads):" in lines
    assert lines.count("  Prime count: 4") == 2


def test_invalid_config_file(capsys, tmp_path, input_file):
    path = tmp_path / "bench.yaml"
    path.write_text("- 1\n", encoding='utf-8')

    assert CLI().run([input_file, "-c", str(path)]) == 1

    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("Invalid configuration: ")


@pytest.mark.parametrize('threads', ["-abc", "-x", "-1e3"])
def test_dash_led_thread_count_defaults_to_processors(capsys, processors, input_file, threads):
    assert CLI().run([input_file, threads]) == 0

    lines, err = _lines(capsys)
    assert "Multi-thread (3 threads):" in lines
    assert lines.count("  Prime count: 4") == 2
    assert err == ""


def test_unrecognized_arguments(input_file):
    with pytest.raises(SystemExit) as excinfo:
        CLI().run([input_file, "2", "-abc"])

    assert excinfo.value.code == 2


def test_empty_history_file(capsys, tmp_path, input_file):
    history = tmp_path / "history.csv"
    history.touch()

    assert CLI().run([input_file, "2", "--history", str(history)]) == 0

    assert len(history.read_text(encoding='utf-8').splitlines()) == 2
