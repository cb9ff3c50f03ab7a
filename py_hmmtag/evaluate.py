from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from tabulate import tabulate

from py_hmmtag.corpus import read_tagged_corpus
from py_hmmtag.model import HiddenMarkovModel
from py_hmmtag.utils import create_logger


@dataclass
class EvaluationResult:
    correct: int = 0
    incorrect: int = 0
    num_sentences: int = 0
    confusions: Counter = field(default_factory=Counter)  # (gold, predicted) -> count, errors only

    @property
    def total(self) -> int:
        return self.correct + self.incorrect

    @property
    def accuracy(self) -> float:
        return self.correct / self.total if self.total else 0.0

    def as_tuple(self) -> tuple[int, int]:
        return self.correct, self.incorrect


def evaluate(
    model: HiddenMarkovModel,
    pairs: Iterable[tuple[Sequence[str], Sequence[str]]],
    verbose: bool = False,
) -> EvaluationResult:
    """Tags each sentence and compares it to the gold tags, position by position up to the shorter length."""
    logger = create_logger("evaluate", verbose)
    model.check_trained()

    result = EvaluationResult()
    for words, gold in pairs:
        predicted = model.tag(words)
        if len(predicted) < len(gold):
            logger.debug(f"   ├─ Decoding stopped after {len(predicted)} of {len(gold)} words: {' '.join(words)!r}")
        for gold_tag, predicted_tag in zip(gold, predicted):
            if gold_tag == predicted_tag:
                result.correct += 1
            else:
                result.incorrect += 1
                result.confusions[(gold_tag, predicted_tag)] += 1
        result.num_sentences += 1

    logger.info(
        f"🎯 Evaluated {result.num_sentences:,} sentences: {result.correct:,} correct, "
        f"{result.incorrect:,} incorrect, accuracy {result.accuracy:.2%}"
    )
    return result


def evaluate_files(
    model: HiddenMarkovModel,
    sentence_path: str | Path,
    tag_path: str | Path,
    verbose: bool = False,
) -> EvaluationResult:
    return evaluate(model, read_tagged_corpus(sentence_path, tag_path, model.lowercase), verbose=verbose)


def format_report(result: EvaluationResult, top_n: int = 10) -> str:
    totals = [
        ["Sentences", f"{result.num_sentences:,}"],
        ["Correct", f"{result.correct:,}"],
        ["Incorrect", f"{result.incorrect:,}"],
        ["Accuracy", f"{result.accuracy:.2%}"],
    ]
    report = tabulate(totals, headers=["Metric", "Value"], tablefmt="grid")
    if result.confusions:
        rows = [[gold, predicted, count] for (gold, predicted), count in result.confusions.most_common(top_n)]
        report += "\n\nMost frequent errors:\n" + tabulate(rows, headers=["Gold", "Predicted", "Count"], tablefmt="grid")
    return report
