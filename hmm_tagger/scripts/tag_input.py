#!/usr/bin/env python3
import argparse
from pathlib import Path

from hmm_tagger.data.datasets import train_from_files
from hmm_tagger.data.utils import tokenize
from hmm_tagger.models.errors import DecodeError, InvalidInputError
from hmm_tagger.models.hmm import HMM, UNSEEN_PENALTY

STOP = "stop"


def tag_lines(hmm, read_line, write):
    """Prompt, tag and echo lines until the stop word (or end of input)."""
    while True:
        write(f"Enter your sentence (type '{STOP}' to end reading): ")
        try:
            line = read_line()
        except EOFError:
            break
        if line.strip() == STOP:
            break
        words = tokenize(line)
        write("\n" + " ".join(words))
        try:
            write("=> " + " ".join(hmm.viterbi(words)))
        except DecodeError as e:
            write(f"[WARN] {e}")


def main(argv=None):
    ap = argparse.ArgumentParser(description="Tag sentences typed at the console")
    ap.add_argument("--train_words", type=Path, default=Path("data/clean/train-sentences.txt"))
    ap.add_argument("--train_tags", type=Path, default=Path("data/clean/train-tags.txt"))
    ap.add_argument("--model", type=Path, default=None, help="load a saved model instead of training")
    ap.add_argument("--unseen_penalty", type=float, default=UNSEEN_PENALTY)
    args = ap.parse_args(argv)

    skipped = []
    try:
        if args.model is not None:
            hmm = HMM.load(args.model)
        else:
            hmm, skipped = train_from_files(args.train_words, args.train_tags,
                                            unseen_penalty=args.unseen_penalty, skip_invalid=True)
    except InvalidInputError as e:
        print(f"[ERROR] {e}")
        return 1
    for ln in skipped:
        print(f"[WARN] training line {ln + 1}: word/tag count mismatch, skipped")
    print(f"[INFO] Model ready ({len(hmm.tags)} tags)")
    tag_lines(hmm, input, print)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
