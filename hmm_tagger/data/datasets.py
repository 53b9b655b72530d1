import random
from pathlib import Path

from hmm_tagger.data.utils import tokenize, read_lines, write_lines, ensure_exists
from hmm_tagger.models.builder import ModelBuilder
from hmm_tagger.models.hmm import UNSEEN_PENALTY


def load_parallel(words_path, tags_path):
    """Yield (words, tags) per line of two parallel files; stops at the shorter one.

    Words are lowercased, tags keep their case.
    """
    ensure_exists(words_path)
    ensure_exists(tags_path)
    for word_line, tag_line in zip(read_lines(words_path), read_lines(tags_path)):
        yield tokenize(word_line), tokenize(tag_line, lowercase=False)


def train_from_files(words_path, tags_path, unseen_penalty=UNSEEN_PENALTY, skip_invalid=False):
    """Build and finalize an HMM from parallel training files.

    Returns (hmm, skipped) where skipped holds the 0-based line numbers of
    mismatched pairs (only non-empty when skip_invalid is set).
    """
    builder = ModelBuilder(unseen_penalty=unseen_penalty)
    skipped = builder.ingest_corpus(load_parallel(words_path, tags_path), skip_invalid=skip_invalid)
    return builder.finalize(), skipped


def parse_tagged_line(line, sep="/"):
    """'The/DET dog/NOUN' -> (['the', 'dog'], ['DET', 'NOUN']).

    The tag follows the last separator, so words may contain it ('1/2/NUM').
    """
    words, tags = [], []
    for token in line.split():
        word, found, tag = token.rpartition(sep)
        if not found or not word or not tag:
            raise ValueError(f"Bad token (need word{sep}TAG): {token!r}")
        words.append(word.lower())
        tags.append(tag)
    return words, tags


def load_tagged_corpus(path, sep="/"):
    """One sentence per line of word/TAG tokens; blank lines are skipped."""
    ensure_exists(path)
    pairs = []
    for ln_no, line in enumerate(read_lines(path), 1):
        if not line.strip():
            continue
        try:
            pairs.append(parse_tagged_line(line, sep=sep))
        except ValueError as e:
            raise ValueError(f"{path}:{ln_no}: {e}") from e
    return pairs


def split_pairs(pairs, seed, train_frac):
    """Seeded shuffle, then {"train": first train_frac, "test": the rest}."""
    pairs = list(pairs)
    random.Random(seed).shuffle(pairs)
    n_train = int(train_frac * len(pairs))
    return {"train": pairs[:n_train], "test": pairs[n_train:]}


def write_split(name, pairs, clean_dir):
    """Write {name}-sentences.txt / {name}-tags.txt line-aligned and return split stats."""
    clean_dir = Path(clean_dir)
    write_lines(clean_dir / f"{name}-sentences.txt", [" ".join(w) for w, _ in pairs])
    write_lines(clean_dir / f"{name}-tags.txt", [" ".join(t) for _, t in pairs])
    n_tokens = sum(len(w) for w, _ in pairs)
    return {
        "n_sents": len(pairs),
        "n_tokens": n_tokens,
        "n_types": len({x for w, _ in pairs for x in w}),
        "avg_len": int(n_tokens / max(1, len(pairs))),
    }
