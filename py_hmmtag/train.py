from collections import Counter
from collections.abc import Iterable, Sequence
from pathlib import Path

from py_hmmtag.corpus import read_tagged_corpus
from py_hmmtag.model import UNSEEN_PENALTY, HiddenMarkovModel, Trainer
from py_hmmtag.utils import create_logger, log_counts


def train_hmm(
    pairs: Iterable[tuple[Sequence[str], Sequence[str]]],
    unseen_penalty: float = UNSEEN_PENALTY,
    lowercase: bool = True,
    verbose: bool = False,
) -> HiddenMarkovModel:
    """Trains a bigram HMM tagger.
    Args:
        pairs: Iterable of (words, tags) token sequences of equal length
        unseen_penalty: Emission log score used for (tag, word) pairs not seen in training
        lowercase: Whether raw sentences are lowercased before decoding
        verbose: Whether to log the most frequent tags and transitions

    Returns:
        The finalized HiddenMarkovModel
    """
    logger = create_logger("train_hmm", verbose)
    trainer = Trainer(unseen_penalty=unseen_penalty, lowercase=lowercase).train(pairs)

    if trainer.num_sentences == 0:
        logger.warning("⚠️  No training examples, the model will refuse to tag")
    else:
        logger.info(f"📚 Counted {trainer.num_sentences:,} sentences with {trainer.num_tokens:,} tokens")
        tag_freq = Counter({trainer.vocab.name(t): sum(row.values()) for t, row in trainer.emission_counts.items()})
        logger.debug(f"   ├─ {len(trainer.vocab):,} tags, most frequent:")
        log_counts(logger, tag_freq)
        edge_freq = Counter(
            {
                f"{trainer.vocab.name(src)} → {trainer.vocab.name(dst)}": count
                for src, row in trainer.transition_counts.items()
                for dst, count in row.items()
            }
        )
        logger.debug("   └─ Most frequent transitions:")
        log_counts(logger, edge_freq)

    model = trainer.build()
    stats = model.summary()
    logger.info(
        f"✨ Finalized model: {stats['tags']:,} tags, {stats['words']:,} words, "
        f"{stats['transition edges']:,} transition edges, {stats['emission pairs']:,} emission pairs"
    )
    dead_ends = [model.tag_name(t) for t in model.vocab.ids.values() if not model.successors(t)]
    if dead_ends:
        logger.debug(f"   └─ Tags with no outgoing transitions: {', '.join(dead_ends)}")
    return model


def train_hmm_from_files(
    sentence_path: str | Path,
    tag_path: str | Path,
    unseen_penalty: float = UNSEEN_PENALTY,
    lowercase: bool = True,
    verbose: bool = False,
) -> HiddenMarkovModel:
    pairs = read_tagged_corpus(sentence_path, tag_path, lowercase)
    return train_hmm(pairs, unseen_penalty=unseen_penalty, lowercase=lowercase, verbose=verbose)
