class HMMError(Exception):
    """Base class for tagger failures."""


class InvalidInputError(HMMError, ValueError):
    """Training pair whose word and tag sequences differ in length, or a bad model document."""

    def __init__(self, message, n_words=None, n_tags=None):
        super().__init__(message)
        self.n_words = n_words
        self.n_tags = n_tags


class DecodeError(HMMError, RuntimeError):
    """No tag in the frontier has a transition into any next tag."""

    def __init__(self, position: int, word: str):
        super().__init__(f"no viable tag path at position {position} (word {word!r})")
        self.position = position
        self.word = word


class ModelStateError(HMMError, RuntimeError):
    """Builder used after finalize()."""
