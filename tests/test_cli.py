import argparse
import json

from polysync_analyzer.cli import main
from polysync_analyzer.cli.syncopation_cli import build_config, find_midi_files
from tests.helpers import BD, SD, make_drum_midi


def test_find_midi_files(tmp_path):
    (tmp_path / "a.mid").write_bytes(b"")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.MIDI").write_bytes(b"")
    (tmp_path / "notes.txt").write_text("x")

    found = find_midi_files(str(tmp_path))
    assert [f.split("/")[-1] for f in found] == ["a.mid", "b.MIDI"]
    assert find_midi_files(str(tmp_path / "a.mid")) == [str(tmp_path / "a.mid")]


def test_cli_scores_file(tmp_path, backbeat_midi, capsys):
    midi_path = tmp_path / "backbeat.mid"
    backbeat_midi.write(str(midi_path))
    output = tmp_path / "result.json"

    assert main(["--input", str(midi_path), "--output", str(output)]) == 0

    result = json.loads(output.read_text())
    assert result["status"] == "completed"
    assert result["grid_length"] == 16
    assert result["total"] == 1
    assert result["failed"] == 0
    assert result["results"][0]["window_scores"][0] == 7
    assert "completed successfully" in capsys.readouterr().out


def test_cli_custom_tables(tmp_path, backbeat_midi):
    midi_path = tmp_path / "backbeat.mid"
    backbeat_midi.write(str(midi_path))
    tables = tmp_path / "tables.json"
    tables.write_text(json.dumps({"interactions": {"HH_BD-HH": 10}}))
    output = tmp_path / "result.json"

    assert main(["--input", str(midi_path), "--tables", str(tables), "--output", str(output)]) == 0
    result = json.loads(output.read_text())
    assert result["results"][0]["window_scores"][0] == 17


def test_cli_bad_grid_length(tmp_path, capsys):
    assert main(["--input", str(tmp_path), "--grid-length", "12"]) == 1
    assert "Fatal error" in capsys.readouterr().out


def test_bars_per_grid_follows_grid_length():
    args = argparse.Namespace(
        tables=None, grid_length=32, bars_per_grid=None, include_non_drums=False, verbose=False,
    )
    config = build_config(args)
    assert config.midi_grid.bars_per_grid == 2
    assert len(config.syncopation.weights) == 32

    args.bars_per_grid = 1
    assert build_config(args).midi_grid.bars_per_grid == 1


def test_cli_32_step_grid_spans_two_bars(tmp_path, capsys):
    midi_path = tmp_path / "two_bars.mid"
    make_drum_midi([(0.0, BD), (2.0, BD), (3.0, SD)]).write(str(midi_path))
    output = tmp_path / "result.json"

    assert main(["--input", str(midi_path), "--grid-length", "32", "--output", str(output)]) == 0
    result = json.loads(output.read_text())
    assert result["bars_per_grid"] == 2
    assert result["results"][0]["window_scores"] == [1]
