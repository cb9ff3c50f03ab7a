import argparse
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from py_hmmtag.corpus import CorpusFormatError, read_sentences
from py_hmmtag.evaluate import evaluate_files, format_report
from py_hmmtag.model import UNSEEN_PENALTY, HiddenMarkovModel, ModelNotTrainedError
from py_hmmtag.train import train_hmm_from_files
from py_hmmtag.utils import create_logger


def tag_file(model: HiddenMarkovModel, input_path: str | Path, output_path: str | Path) -> int:
    """Writes one line of predicted tags per input sentence line. Returns the number of sentences tagged."""
    model.check_trained()
    num_tagged = 0
    with open(output_path, "w", encoding="utf-8") as out:
        for sentence in read_sentences(input_path):
            out.write(" ".join(model.decode(sentence)) + "\n")
            num_tagged += bool(sentence.strip())
    return num_tagged


def run_interactive(
    model: HiddenMarkovModel,
    lines: Iterable[str] | None = None,
    out: TextIO | None = None,
    prompt: str = "> ",
) -> int:
    """Tags one line at a time until end of input or a blank line. Returns the number of lines tagged."""
    model.check_trained()
    lines = sys.stdin if lines is None else lines
    out = sys.stdout if out is None else out
    show_prompt = lines is sys.stdin and sys.stdin.isatty()

    num_tagged = 0
    if show_prompt:
        out.write(prompt)
        out.flush()
    for line in lines:
        if not line.strip():
            break
        out.write(" ".join(model.decode(line)) + "\n")
        num_tagged += 1
        if show_prompt:
            out.write(prompt)
            out.flush()
    return num_tagged


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(description="Train a bigram HMM part-of-speech tagger and use it.")
    parser.add_argument("train_sentences", help="Training file, one sentence of whitespace-separated words per line")
    parser.add_argument("train_tags", help="Training file, one line of tags per sentence line")
    parser.add_argument("--test", nargs=2, metavar=("SENTENCES", "TAGS"), help="Evaluate on a held-out file pair")
    parser.add_argument("--tag-file", nargs=2, metavar=("INPUT", "OUTPUT"), help="Tag every line of INPUT into OUTPUT")
    parser.add_argument("--interactive", action="store_true", help="Tag lines typed on standard input")
    parser.add_argument("--top-errors", type=int, default=10, help="Number of confusions in the evaluation report")
    parser.add_argument(
        "--unseen-penalty", type=float, default=UNSEEN_PENALTY, help="Emission log score for unseen (tag, word) pairs"
    )
    parser.add_argument("--keep-case", action="store_true", help="Do not lowercase sentences and tags")
    parser.add_argument("--verbose", action="store_true", help="Log training and evaluation details")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_arguments(argv)
    logger = create_logger("py_hmmtag", args.verbose)

    try:
        model = train_hmm_from_files(
            args.train_sentences,
            args.train_tags,
            unseen_penalty=args.unseen_penalty,
            lowercase=not args.keep_case,
            verbose=args.verbose,
        )
        if args.test:
            result = evaluate_files(model, *args.test, verbose=args.verbose)
            print(format_report(result, top_n=args.top_errors))
        if args.tag_file:
            num_tagged = tag_file(model, *args.tag_file)
            logger.info(f"💾 Tagged {num_tagged:,} sentences into {args.tag_file[1]}")
        if args.interactive:
            run_interactive(model)
    except (CorpusFormatError, ModelNotTrainedError, OSError) as e:
        logger.error(f"❌ {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
