import math

import pytest

from hmm_tagger.models.builder import ModelBuilder
from hmm_tagger.models.errors import InvalidInputError, ModelStateError
from hmm_tagger.models.hmm import START_TAG
from hmm_tagger.models.tables import row_mass

CORPUS = [
    (["The", "dog", "runs"], ["DET", "NOUN", "VERB"]),
    (["a", "cat", "sleeps", "."], ["DET", "NOUN", "VERB", "."]),
    (["dogs", "run"], ["NOUN", "VERB"]),
    (["the", "big", "dog", "barks", "."], ["DET", "ADJ", "NOUN", "VERB", "."]),
]


def test_counts_before_finalize():
    b = ModelBuilder()
    b.ingest_sentence(["The", "dog", "runs"], ["DET", "NOUN", "VERB"])
    assert b.emissions["DET"] == {"the": 1}
    assert b.transitions[START_TAG] == {"DET": 1}
    assert b.transitions["DET"] == {"NOUN": 1}
    assert b.transitions["NOUN"] == {"VERB": 1}
    assert "VERB" not in b.transitions


def test_sentences_do_not_link():
    b = ModelBuilder()
    b.ingest_sentence(["dog"], ["NOUN"])
    b.ingest_sentence(["runs"], ["VERB"])
    assert b.transitions[START_TAG] == {"NOUN": 1, "VERB": 1}
    assert "NOUN" not in b.transitions


def test_log_probabilities(build):
    hmm = build(CORPUS)
    assert hmm.emissions["DET"]["the"] == pytest.approx(math.log(2 / 3))
    assert hmm.emissions["DET"]["a"] == pytest.approx(math.log(1 / 3))
    assert hmm.transitions[START_TAG]["DET"] == pytest.approx(math.log(3 / 4))
    assert hmm.transitions["VERB"]["."] == pytest.approx(0.0)


def test_rows_sum_to_one(build):
    hmm = build(CORPUS)
    for mass in row_mass(hmm.emissions).values():
        assert mass == pytest.approx(1.0)
    trans_mass = row_mass(hmm.transitions)
    assert START_TAG in trans_mass
    for mass in trans_mass.values():
        assert mass == pytest.approx(1.0)


def test_start_tag_never_emits(build):
    hmm = build(CORPUS)
    assert START_TAG not in hmm.emissions
    assert START_TAG not in hmm.tags


def test_mismatched_lengths_rejected_atomically():
    b = ModelBuilder()
    with pytest.raises(InvalidInputError) as exc:
        b.ingest_sentence(["the", "dog"], ["DET"])
    assert (exc.value.n_words, exc.value.n_tags) == (2, 1)
    assert not b.emissions
    assert not b.transitions


def test_empty_sentence_contributes_nothing():
    b = ModelBuilder()
    b.ingest_sentence([], [])
    assert not b.emissions
    assert not b.transitions


def test_ingest_corpus_skip_invalid(dog_sentence):
    pairs = [dog_sentence, (["oops"], []), dog_sentence]
    b = ModelBuilder()
    assert b.ingest_corpus(pairs, skip_invalid=True) == [1]
    assert b.emissions["NOUN"]["dog"] == 2

    with pytest.raises(InvalidInputError):
        ModelBuilder().ingest_corpus(pairs)


def test_finalize_only_once(dog_sentence):
    b = ModelBuilder()
    b.ingest_sentence(*dog_sentence)
    b.finalize()
    with pytest.raises(ModelStateError):
        b.finalize()
    with pytest.raises(ModelStateError):
        b.ingest_sentence(["dog"], ["NOUN"])


def test_same_training_same_tables(build):
    a, b = build(CORPUS), build(CORPUS)
    assert a.to_dict() == b.to_dict()
    assert list(a.emissions) == list(b.emissions)


def test_finalized_tables_read_only(dog_hmm):
    with pytest.raises(TypeError):
        dog_hmm.emissions["DET"]["cat"] = 0.0
    with pytest.raises(TypeError):
        dog_hmm.transitions["VERB"] = {}
