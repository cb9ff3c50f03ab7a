from collections.abc import Iterable, Sequence
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from py_hmmtag.model import HiddenMarkovModel

NEG_INF = float("-inf")


class Boundary(IntEnum):
    """Sentinel states shared by every trellis. Trained tags are indices >= 0, so these never collide."""

    START = -1


class Trellis:
    """The decoding graph of one sentence: states are tag indices, one column per word.

    Only states reachable through an observed transition are ever scored, so the
    frontier at each column is usually much smaller than the tag set.
    """

    def __init__(self, model: "HiddenMarkovModel", words: Sequence[str]):
        self.model = model
        self.words = list(words)
        self.size = len(self.words)

    def viterbi(self) -> tuple[list[int], float]:
        frontier = {Boundary.START: 0.0}
        back_pointers: list[dict[int, int]] = []
        for word in self.words:
            scores, back = {}, {}
            for state in sorted(frontier):  # ascending index: ties keep the smallest predecessor
                for next_state, trans_score in self.model.successors(state).items():
                    score = frontier[state] + trans_score + self.model.emission_log_prob(next_state, word)
                    if next_state not in scores or score > scores[next_state]:
                        scores[next_state] = score
                        back[next_state] = state
            if not scores:
                break  # every live state is a dead end, the rest of the sentence stays untagged
            frontier = scores
            back_pointers.append(back)

        if not back_pointers:
            return [], 0.0

        best_state, best_score = None, NEG_INF
        for state in sorted(frontier):
            if best_state is None or frontier[state] > best_score:
                best_state, best_score = state, frontier[state]

        path, state = [], best_state
        for back in reversed(back_pointers):
            path.append(state)
            prev = back.get(state)
            if prev is None or prev == Boundary.START:
                break
            state = prev
        return path[::-1], best_score

    def all_paths(self, position: int = 0, state: int = Boundary.START) -> Iterable[tuple[tuple[int, ...], float]]:
        """Every full-length tag path reachable from `state`, with its score. Exponential, for small inputs only."""
        if position == self.size:
            yield (), 0.0
            return
        word = self.words[position]
        for next_state, trans_score in self.model.successors(state).items():
            step_score = trans_score + self.model.emission_log_prob(next_state, word)
            for sub_path, sub_score in self.all_paths(position + 1, next_state):
                yield (next_state,) + sub_path, step_score + sub_score

    def score(self, path: Sequence[int]) -> float:
        """Log score of `path` over the first len(path) words, -inf if it uses an unobserved transition."""
        if len(path) > self.size:
            raise ValueError(f"Path of length {len(path)} is longer than the sentence ({self.size} words)")
        total, prev = 0.0, Boundary.START
        for state, word in zip(path, self.words):
            trans_score = self.model.successors(prev).get(state)
            if trans_score is None:
                return NEG_INF
            total += trans_score + self.model.emission_log_prob(state, word)
            prev = state
        return total

    def tags(self) -> list[str]:
        path, _ = self.viterbi()
        return [self.model.tag_name(state) for state in path]
