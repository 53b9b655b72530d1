import pytest

from hmm_tagger.models.builder import ModelBuilder

DOG_SENTENCE = (["the", "dog", "runs"], ["DET", "NOUN", "VERB"])


def _build(pairs, **kwargs):
    builder = ModelBuilder(**kwargs)
    for words, tags in pairs:
        builder.ingest_sentence(words, tags)
    return builder.finalize()


@pytest.fixture
def build():
    """Train and finalize an HMM from (words, tags) pairs."""
    return _build


@pytest.fixture
def dog_sentence():
    return DOG_SENTENCE


@pytest.fixture
def dog_hmm():
    return _build([DOG_SENTENCE])


@pytest.fixture
def write_parallel(tmp_path):
    """Write parallel word/tag files and return their paths."""
    def _write(word_lines, tag_lines, prefix="train"):
        wp = tmp_path / f"{prefix}-sentences.txt"
        tp = tmp_path / f"{prefix}-tags.txt"
        wp.write_text("\n".join(word_lines) + "\n", encoding="utf-8")
        tp.write_text("\n".join(tag_lines) + "\n", encoding="utf-8")
        return wp, tp
    return _write
