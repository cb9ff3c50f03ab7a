import pytest

from py_hmmtag.evaluate import EvaluationResult, evaluate, evaluate_files, format_report
from py_hmmtag.model import ModelNotTrainedError
from py_hmmtag.train import train_hmm, train_hmm_from_files


def test_self_evaluation_is_perfect(toy_model, toy_pairs):
    result = evaluate(toy_model, toy_pairs)
    assert result.as_tuple() == (6, 0)
    assert result.accuracy == 1.0
    assert result.num_sentences == 2
    assert not result.confusions


def test_sample_self_evaluation(data_dir):
    model = train_hmm_from_files(data_dir / "sample.sentences", data_dir / "sample.tags")
    result = evaluate_files(model, data_dir / "sample.sentences", data_dir / "sample.tags")
    assert result.incorrect == 0
    assert result.correct == 30


def test_errors_are_tallied(toy_model):
    # gold tags deliberately wrong in the last position
    result = evaluate(toy_model, [(["the", "cat", "runs"], ["det", "noun", "noun"])])
    assert result.as_tuple() == (2, 1)
    assert result.confusions == {("noun", "verb"): 1}
    assert result.accuracy == pytest.approx(2 / 3)


def test_alignment_stops_at_shorter_sequence():
    model = train_hmm([(["a", "b"], ["n", "v"])])
    # decoding dies after two words, so only two positions are compared
    result = evaluate(model, [(["a", "b", "c"], ["n", "v", "n"])])
    assert result.as_tuple() == (2, 0)


def test_evaluate_untrained(untrained_model, toy_pairs):
    with pytest.raises(ModelNotTrainedError):
        evaluate(untrained_model, toy_pairs)


def test_empty_result():
    result = EvaluationResult()
    assert result.total == 0
    assert result.accuracy == 0.0


def test_format_report(toy_model):
    result = evaluate(toy_model, [(["the", "cat", "runs"], ["det", "noun", "noun"])])
    report = format_report(result)
    assert "Accuracy" in report
    assert "66.67%" in report
    assert "Most frequent errors" in report
    assert "verb" in report
    assert "Most frequent errors" not in format_report(EvaluationResult(correct=3))
