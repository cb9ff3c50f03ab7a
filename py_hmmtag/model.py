import math
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from py_hmmtag.corpus import iter_tagged_lines, normalize, read_tagged_corpus, tokenize
from py_hmmtag.trellis import NEG_INF, Boundary, Trellis

UNSEEN_PENALTY = -10.0  # emission log score for a (tag, word) pair never seen in training

_EMPTY_ROW: Mapping = MappingProxyType({})


class ModelNotTrainedError(RuntimeError):
    """Raised when a model without any transitions or emissions is queried."""


class TrainerFinalizedError(RuntimeError):
    """Raised when counts are added to a trainer that has already been built."""


class TagVocabulary:
    """Growable mapping between tag names and small integer indices."""

    def __init__(self, tags: Iterable[str] = ()):
        self.names: list[str] = []
        self.ids: dict[str, int] = {}
        self.frozen = False
        for tag in tags:
            self.add(tag)

    def freeze(self) -> "TagVocabulary":
        """Makes the vocabulary read-only. Returns self."""
        self.names = tuple(self.names)
        self.ids = MappingProxyType(self.ids)
        self.frozen = True
        return self

    def add(self, tag: str) -> int:
        if self.frozen:
            raise TypeError(f"Cannot add tag {tag!r} to a frozen vocabulary")
        index = self.ids.get(tag)
        if index is None:
            index = self.ids[tag] = len(self.names)
            self.names.append(tag)
        return index

    def name(self, index: int) -> str:
        if index == Boundary.START:
            return "<start>"
        return self.names[index]

    def sorted(self) -> tuple["TagVocabulary", dict[int, int]]:
        """A lexicographically ordered copy, and the old -> new index mapping."""
        vocab = TagVocabulary(sorted(self.names))
        return vocab, {index: vocab.ids[tag] for index, tag in enumerate(self.names)}

    def __getitem__(self, tag: str) -> int:
        return self.ids[tag]

    def __contains__(self, tag: str) -> bool:
        return tag in self.ids

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self):
        return iter(self.names)


def log_normalize(counts: Mapping, remap: Mapping | None = None) -> dict:
    """Replaces each count c with ln(c / total). An all-zero row normalizes to an empty row."""
    total = sum(counts.values())
    if total <= 0:
        return {}
    row = {}
    for key, count in counts.items():
        if count > 0:
            row[key if remap is None else remap[key]] = math.log(count / total)
    return dict(sorted(row.items()))


@dataclass(frozen=True, eq=False)
class HiddenMarkovModel:
    """Finalized first-order HMM: log transition and emission tables, read-only."""

    vocab: TagVocabulary
    transitions: Mapping[int, Mapping[int, float]]
    emissions: Mapping[int, Mapping[str, float]]
    unseen_penalty: float = UNSEEN_PENALTY
    lowercase: bool = True
    num_sentences: int = 0
    num_tokens: int = 0
    words: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_trained(self) -> bool:
        return bool(self.transitions) or bool(self.emissions)

    @property
    def tags(self) -> list[str]:
        return list(self.vocab.names)

    def tag_name(self, state: int) -> str:
        return self.vocab.name(state)

    def _state(self, tag: str | int) -> int | None:
        if isinstance(tag, str):
            return self.vocab.ids.get(tag)
        return tag

    def successors(self, state: str | int) -> Mapping[int, float]:
        return self.transitions.get(self._state(state), _EMPTY_ROW)

    def transition_log_prob(self, source: str | int, destination: str | int) -> float:
        return self.successors(source).get(self._state(destination), NEG_INF)

    def emission_log_prob(self, tag: str | int, word: str) -> float:
        return self.emissions.get(self._state(tag), _EMPTY_ROW).get(word, self.unseen_penalty)

    def check_trained(self):
        if not self.is_trained:
            raise ModelNotTrainedError("The model has no transitions or emissions, train it before tagging.")

    def tag(self, words: Sequence[str]) -> list[str]:
        """Most likely tag sequence for already tokenized words."""
        self.check_trained()
        if self.lowercase:
            words = [normalize(word) for word in words]
        return Trellis(self, words).tags()

    def decode(self, sentence: str) -> list[str]:
        """Tags a raw sentence after case normalization and whitespace tokenization."""
        self.check_trained()
        return self.tag(tokenize(sentence, self.lowercase))

    def summary(self) -> dict[str, int]:
        return {
            "sentences": self.num_sentences,
            "tokens": self.num_tokens,
            "tags": len(self.vocab),
            "words": len(self.words),
            "transition edges": sum(len(row) for row in self.transitions.values()),
            "emission pairs": sum(len(row) for row in self.emissions.values()),
        }


class Trainer:
    """Accumulates transition and emission counts, then builds a HiddenMarkovModel exactly once."""

    def __init__(self, unseen_penalty: float = UNSEEN_PENALTY, lowercase: bool = True):
        if not (unseen_penalty < 0 and math.isfinite(unseen_penalty)):
            raise ValueError(f"unseen_penalty must be a finite negative log score, got {unseen_penalty}")
        self.unseen_penalty = unseen_penalty
        self.lowercase = lowercase
        self.vocab = TagVocabulary()
        self.transition_counts: dict[int, Counter] = {}
        self.emission_counts: dict[int, Counter] = {}
        self.num_sentences = 0
        self.num_tokens = 0
        self._model: HiddenMarkovModel | None = None

    @property
    def finalized(self) -> bool:
        return self._model is not None

    def accumulate(self, words: Sequence[str], tags: Sequence[str]) -> None:
        if self._model is not None:
            raise TrainerFinalizedError("Counts were already converted to log probabilities")
        if len(words) != len(tags):
            raise ValueError(f"Got {len(words)} words but {len(tags)} tags: {words!r} / {tags!r}")
        if not words:
            raise ValueError("Training examples must contain at least one word")

        if self.lowercase:
            words = [normalize(word) for word in words]
            tags = [normalize(tag) for tag in tags]
        tag_ids = [self.vocab.add(tag) for tag in tags]
        self.transition_counts.setdefault(Boundary.START, Counter())[tag_ids[0]] += 1
        for i, (word, tag_id) in enumerate(zip(words, tag_ids)):
            self.emission_counts.setdefault(tag_id, Counter())[word] += 1
            row = self.transition_counts.setdefault(tag_id, Counter())  # final tags still get a (maybe empty) row
            if i + 1 < len(tag_ids):
                row[tag_ids[i + 1]] += 1
        self.num_sentences += 1
        self.num_tokens += len(words)

    def train(self, pairs: Iterable[tuple[Sequence[str], Sequence[str]]]) -> "Trainer":
        for words, tags in pairs:
            self.accumulate(words, tags)
        return self

    def train_from_lines(self, sentence_lines: Iterable[str], tag_lines: Iterable[str]) -> "Trainer":
        return self.train(iter_tagged_lines(sentence_lines, tag_lines, self.lowercase))

    def train_from_files(self, sentence_path: str | Path, tag_path: str | Path) -> "Trainer":
        return self.train(read_tagged_corpus(sentence_path, tag_path, self.lowercase))

    def build(self) -> HiddenMarkovModel:
        """Converts counts to log probabilities. Later calls return the same model."""
        if self._model is not None:
            return self._model

        vocab, remap = self.vocab.sorted()
        remap[Boundary.START] = Boundary.START
        transitions = {
            remap[source]: MappingProxyType(log_normalize(row, remap)) for source, row in self.transition_counts.items()
        }
        emissions = {remap[tag]: MappingProxyType(log_normalize(row)) for tag, row in self.emission_counts.items()}
        for table in (transitions, emissions):
            for row in table.values():
                if not all(math.isfinite(v) and v <= 0.0 for v in row.values()):
                    raise ArithmeticError(f"Non-finite or positive log probability in row {dict(row)!r}")

        self._model = HiddenMarkovModel(
            vocab=vocab.freeze(),
            transitions=MappingProxyType(dict(sorted(transitions.items()))),
            emissions=MappingProxyType(dict(sorted(emissions.items()))),
            unseen_penalty=self.unseen_penalty,
            lowercase=self.lowercase,
            num_sentences=self.num_sentences,
            num_tokens=self.num_tokens,
            words=frozenset(word for row in self.emission_counts.values() for word in row),
        )
        return self._model
