import json
import os

from turing_simulator.run_logger import JSONLogger, result_entry


def read_lines(path):
    with open(path, encoding="utf-8") as handle:
        return [json.loads(line) for line in handle]


def test_log_result(tmp_path, even_ones):
    logger = JSONLogger(str(tmp_path / "logs"), "test_")
    result = even_ones.execute("11")
    logger.log(result_entry("even_ones", "11", result))

    entries = read_lines(logger.current_log)
    assert len(entries) == 1
    entry = entries[0]
    assert entry["machine"] == "even_ones"
    assert entry["input"] == "11"
    assert entry["outcome"] == "Accepted"
    assert entry["reason"] == "ACCEPT_STATE"
    assert entry["steps"] == result.steps
    assert entry["tape"] == "11_"


def test_log_batch_appends(tmp_path):
    logger = JSONLogger(str(tmp_path), "batch_")
    logger.log({"n": 1})
    logger.log_batch([{"n": 2}, {"n": 3}])
    assert [entry["n"] for entry in read_lines(logger.current_log)] == [1, 2, 3]


def test_log_file_name(tmp_path):
    logger = JSONLogger(str(tmp_path), "turing_")
    logger.rotate()
    name = os.path.basename(logger.current_log)
    assert name.startswith("turing_")
    assert name.endswith(".jsonl")
