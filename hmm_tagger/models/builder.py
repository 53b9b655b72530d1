from hmm_tagger.models.errors import InvalidInputError, ModelStateError
from hmm_tagger.models.hmm import HMM, START_TAG, UNSEEN_PENALTY
from hmm_tagger.models.tables import new_counts, log_normalize, freeze


class ModelBuilder:
    """Counts (word, tag) emissions and tag bigrams, then finalizes into an HMM."""

    def __init__(self, unseen_penalty=UNSEEN_PENALTY):
        self.unseen_penalty = unseen_penalty
        self.emissions = new_counts()     # tag -> Counter(word)
        self.transitions = new_counts()   # tag -> Counter(next_tag)
        self.finalized = False

    def _check_open(self):
        if self.finalized:
            raise ModelStateError("model already finalized; create a new ModelBuilder to retrain")

    def record_observation(self, word, tag):
        self._check_open()
        self.emissions[tag][word.lower()] += 1

    def record_transition(self, curr_tag, next_tag):
        self._check_open()
        self.transitions[curr_tag][next_tag] += 1

    def ingest_sentence(self, words, tags):
        self._check_open()
        if len(words) != len(tags):
            raise InvalidInputError(
                f"sentence has {len(words)} words but {len(tags)} tags",
                n_words=len(words), n_tags=len(tags),
            )
        last = len(words) - 1
        for i, (word, tag) in enumerate(zip(words, tags)):
            self.record_observation(word, tag)
            if i == 0:
                self.record_transition(START_TAG, tag)
            if i < last:
                self.record_transition(tag, tags[i + 1])

    def ingest_corpus(self, pairs, skip_invalid=False):
        """Feed (words, tags) pairs; returns indices of skipped mismatched pairs."""
        skipped = []
        for idx, (words, tags) in enumerate(pairs):
            try:
                self.ingest_sentence(words, tags)
            except InvalidInputError:
                if not skip_invalid:
                    raise
                skipped.append(idx)
        return skipped

    def finalize(self):
        """Normalise counts into log-probabilities (once) and return the read-only HMM."""
        self._check_open()
        log_normalize(self.emissions)
        log_normalize(self.transitions)
        self.finalized = True
        return HMM(freeze(self.emissions), freeze(self.transitions), unseen_penalty=self.unseen_penalty)
