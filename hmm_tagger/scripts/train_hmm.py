import argparse
from pathlib import Path

from hmm_tagger.data.datasets import train_from_files
from hmm_tagger.models.errors import InvalidInputError
from hmm_tagger.models.hmm import START_TAG, UNSEEN_PENALTY
from hmm_tagger.models.tables import row_mass


def main(argv=None):
    ap = argparse.ArgumentParser(description="Train an HMM tagger from parallel sentence/tag files")
    ap.add_argument("--train_words", type=Path, default=Path("data/clean/train-sentences.txt"))
    ap.add_argument("--train_tags", type=Path, default=Path("data/clean/train-tags.txt"))
    ap.add_argument("--out", type=Path, default=Path("outputs/hmm.json"))
    ap.add_argument("--unseen_penalty", type=float, default=UNSEEN_PENALTY)
    ap.add_argument("--skip_invalid", action="store_true", help="skip mismatched lines instead of aborting")
    args = ap.parse_args(argv)

    try:
        hmm, skipped = train_from_files(
            args.train_words, args.train_tags,
            unseen_penalty=args.unseen_penalty, skip_invalid=args.skip_invalid,
        )
    except InvalidInputError as e:
        print(f"[ERROR] {e} (rerun with --skip_invalid to ignore such lines)")
        return 1
    for ln in skipped:
        print(f"[WARN] line {ln + 1}: word/tag count mismatch, skipped")

    n_starts = len(hmm.transitions.get(START_TAG, {}))
    print(f"[INFO] Tags: {len(hmm.tags)}  Vocabulary: {len(hmm.vocab)}  Sentence-initial tags: {n_starts}")
    masses = list(row_mass(hmm.emissions).values()) + list(row_mass(hmm.transitions).values())
    drift = max((abs(m - 1.0) for m in masses), default=0.0)
    print(f"[OK] {len(masses)} probability rows normalised (max |sum - 1| = {drift:.2e})")
    out = hmm.save(args.out)
    print(f"[SAVED] {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
