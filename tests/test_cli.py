import json

import pytest

from turing_simulator import cli
from turing_simulator.config_loader import EXAMPLES_DIRECTORY


def run_json(capsys, *argv):
    code = cli.main([*argv, "--json"])
    return code, json.loads(capsys.readouterr().out)


def test_json_output_for_example(capsys):
    code, payload = run_json(capsys, "--example", "even_ones", "-s", "11", "-s", "101")
    assert code == 0
    assert payload["11"]["outcome"] == "Accepted"
    assert payload["11"]["steps"] == 3
    assert payload["101"]["outcome"] == "Rejected"
    assert payload["101"]["final_state"] == "reject"


def test_json_uses_simulation_strings_from_file(capsys):
    code, payload = run_json(capsys, str(EXAMPLES_DIRECTORY / "even_ones.json"))
    assert code == 0
    assert set(payload) == {"", "1", "11", "101", "0101"}
    assert payload[""]["steps"] == 1


def test_json_trace_includes_snapshots(capsys):
    code, payload = run_json(capsys, "--example", "accept_all", "-s", "ab", "--trace")
    assert code == 0
    snapshots = payload["ab"]["snapshots"]
    assert [snapshot["step"] for snapshot in snapshots] == [0, 1, 2, 3]
    assert snapshots[-1]["state"] == "accept"


def test_json_reports_invalid_input(capsys):
    code, payload = run_json(capsys, "--example", "even_ones", "-s", "012")
    assert code == 1
    assert "2" in payload["012"]["error"]


def test_max_steps_option(capsys):
    code, payload = run_json(capsys, "--example", "even_ones", "-s", "0000", "--max-steps", "0")
    assert code == 0
    assert payload["0000"]["outcome"] == "Undetermined"
    assert payload["0000"]["halted"] is False
    assert payload["0000"]["tape"] == "0000"


def test_settings_file_sets_budget(tmp_path, capsys):
    settings = tmp_path / "settings.yaml"
    settings.write_text("max_steps: 2\n", encoding="utf-8")
    code, payload = run_json(capsys, "--example", "even_ones", "-s", "0000", "--settings", str(settings))
    assert payload["0000"]["steps"] == 2
    assert payload["0000"]["outcome"] == "Undetermined"


def test_log_dir_writes_jsonl(tmp_path, capsys):
    log_dir = tmp_path / "logs"
    code, _ = run_json(capsys, "--example", "even_ones", "-s", "11", "--log-dir", str(log_dir))
    assert code == 0
    files = list(log_dir.glob("*.jsonl"))
    assert len(files) == 1
    entry = json.loads(files[0].read_text(encoding="utf-8").splitlines()[0])
    assert entry["machine"] == "even_ones"
    assert entry["outcome"] == "Accepted"


def test_text_output(capsys):
    code = cli.main(["--example", "even_ones", "-s", "11", "-s", "1", "--trace"])
    out = capsys.readouterr().out
    assert code == 0
    assert "ACEPTA" in out
    assert "RECHAZA" in out
    assert "Paso 0000" in out


def test_text_output_invalid_input(capsys):
    code = cli.main(["--example", "even_ones", "-s", "a"])
    assert code == 1
    assert "Símbolo de entrada inválido" in capsys.readouterr().out


def test_list_examples(capsys):
    assert cli.main(["--list-examples"]) == 0
    out = capsys.readouterr().out
    assert "even_ones" in out
    assert "binary_increment" in out


def test_unknown_example():
    with pytest.raises(SystemExit) as info:
        cli.main(["--example", "missing", "-s", "1"])
    assert info.value.code == 2


def test_machine_is_required():
    with pytest.raises(SystemExit):
        cli.main(["-s", "1"])


def test_invalid_machine_file(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"states": ["q0"]}), encoding="utf-8")
    assert cli.main([str(path), "-s", "1"]) == 1
    assert "Error" in capsys.readouterr().out


def test_visual_mode_navigation(monkeypatch, capsys, even_ones):
    choices = iter(["n", "n", "p", "l", "f", "q"])
    monkeypatch.setattr(cli.Prompt, "ask", lambda *args, **kwargs: next(choices))
    assert cli.run_visual_mode(even_ones, "11", 100) == 0


def test_visual_mode_stops_at_last_step(monkeypatch, capsys, even_ones):
    choices = iter(["l", "n", "n", "q"])
    monkeypatch.setattr(cli.Prompt, "ask", lambda *args, **kwargs: next(choices))
    # "11": tres transiciones, cuatro instantáneas
    assert cli.run_visual_mode(even_ones, "11", 100) == 3
    assert "ACEPTA" in capsys.readouterr().out


def test_visual_mode_jump_to_step(monkeypatch, capsys, even_ones):
    choices = iter(["j", "j", "q"])
    steps = iter([2, 9])
    monkeypatch.setattr(cli.Prompt, "ask", lambda *args, **kwargs: next(choices))
    monkeypatch.setattr(cli.IntPrompt, "ask", lambda *args, **kwargs: next(steps))
    # el segundo salto queda fuera de 0..3 y se ignora
    assert cli.run_visual_mode(even_ones, "11", 100) == 2
    assert "fuera de rango" in capsys.readouterr().out
