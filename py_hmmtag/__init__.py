from .model import UNSEEN_PENALTY, HiddenMarkovModel, ModelNotTrainedError, TagVocabulary, Trainer, TrainerFinalizedError
from .trellis import Boundary, Trellis
from .corpus import CorpusFormatError, tokenize
from .train import train_hmm, train_hmm_from_files
from .evaluate import EvaluationResult, evaluate, evaluate_files

__all__ = [
    "train_hmm",
    "train_hmm_from_files",
    "evaluate",
    "evaluate_files",
    "EvaluationResult",
    "Trainer",
    "HiddenMarkovModel",
    "TagVocabulary",
    "Trellis",
    "Boundary",
    "UNSEEN_PENALTY",
    "ModelNotTrainedError",
    "TrainerFinalizedError",
    "CorpusFormatError",
    "tokenize",
]
