import io

import pytest

from py_hmmtag.model import ModelNotTrainedError
from py_hmmtag.script_tag import main, run_interactive, tag_file


def test_run_interactive(toy_model):
    out = io.StringIO()
    lines = ["the cat runs\n", "A DOG sleeps\n", "\n", "never read\n"]
    assert run_interactive(toy_model, lines, out) == 2
    assert out.getvalue() == "det noun verb\ndet noun verb\n"


def test_run_interactive_untrained(untrained_model):
    out = io.StringIO()
    with pytest.raises(ModelNotTrainedError):
        run_interactive(untrained_model, ["the cat runs\n"], out)
    assert out.getvalue() == ""


def test_tag_file(toy_model, tmp_path):
    input_path = tmp_path / "input.txt"
    output_path = tmp_path / "output.txt"
    input_path.write_text("the cat runs\n\na dog sleeps\n", encoding="utf-8")
    assert tag_file(toy_model, input_path, output_path) == 2
    assert output_path.read_text(encoding="utf-8") == "det noun verb\n\ndet noun verb\n"


def test_main_evaluates(data_dir, capsys):
    sentences, tags = str(data_dir / "sample.sentences"), str(data_dir / "sample.tags")
    assert main([sentences, tags, "--test", sentences, tags]) == 0
    assert "100.00%" in capsys.readouterr().out


def test_main_tags_file(data_dir, tmp_path):
    output_path = tmp_path / "predicted.tags"
    args = [str(data_dir / "toy.sentences"), str(data_dir / "toy.tags")]
    assert main(args + ["--tag-file", str(data_dir / "toy.sentences"), str(output_path)]) == 0
    assert output_path.read_text(encoding="utf-8") == "det noun verb\ndet noun verb\n"


def test_main_reports_misaligned_corpus(data_dir, tmp_path):
    tags_path = tmp_path / "short.tags"
    tags_path.write_text("det noun verb\n", encoding="utf-8")
    assert main([str(data_dir / "sample.sentences"), str(tags_path)]) == 1


def test_main_reports_untrained_model(tmp_path):
    empty = tmp_path / "empty.txt"
    empty.write_text("", encoding="utf-8")
    assert main([str(empty), str(empty), "--test", str(empty), str(empty)]) == 1
