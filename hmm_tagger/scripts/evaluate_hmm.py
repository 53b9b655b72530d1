import argparse
from pathlib import Path

import numpy as np

from hmm_tagger.data.datasets import load_parallel, train_from_files
from hmm_tagger.models.errors import DecodeError, InvalidInputError
from hmm_tagger.models.hmm import HMM, UNSEEN_PENALTY


def evaluate(hmm, pairs):
    """Tag every (words, gold_tags) pair and count per-token hits.

    A line whose gold tags do not line up with its words is skipped; a line
    that cannot be decoded counts every gold tag as incorrect.
    """
    labels = hmm.tags
    index = {t: i for i, t in enumerate(labels)}
    rows = []
    failures = []
    skipped = []
    golds, preds = [], []

    def label_id(tag):
        if tag not in index:
            index[tag] = len(labels)
            labels.append(tag)
        return index[tag]

    for ln, (words, gold) in enumerate(pairs):
        if len(words) != len(gold):
            skipped.append(ln)
            continue
        try:
            pred = hmm.viterbi(words)
        except DecodeError as e:
            failures.append((ln, e.position, e.word))
            pred = None
        rows.append((words, gold, pred))
        for i, g in enumerate(gold):
            golds.append(label_id(g))
            # -1 marks an undecodable token
            preds.append(label_id(pred[i]) if pred is not None else -1)

    golds = np.asarray(golds, dtype=np.int64)
    preds = np.asarray(preds, dtype=np.int64)
    correct = int((golds == preds).sum())
    total = int(golds.size)

    conf = np.zeros((len(labels), len(labels)), dtype=np.int64)
    decoded = preds >= 0
    np.add.at(conf, (golds[decoded], preds[decoded]), 1)

    return {
        "labels": labels,
        "confusion": conf,
        "correct": correct,
        "incorrect": total - correct,
        "total": total,
        "accuracy": correct / max(1, total),
        "rows": rows,
        "failures": failures,
        "skipped": skipped,
    }


def format_report(stats, verbose=False):
    lines = []
    if verbose:
        for words, gold, pred in stats["rows"]:
            lines.append("")
            lines.append(" ".join(words))
            lines.append("=> " + (" ".join(pred) if pred is not None else "<no path>"))
        lines.append("")
    lines.append(f"Tagged correctly: {stats['correct']}\tTagged incorrectly: {stats['incorrect']}")
    lines.append(f"Token accuracy: {stats['accuracy']:.3f}")
    for ln, pos, word in stats["failures"]:
        lines.append(f"[WARN] line {ln + 1}: no tag path at position {pos} ({word!r})")
    for ln in stats["skipped"]:
        lines.append(f"[WARN] line {ln + 1}: word/tag count mismatch, skipped")

    labels = stats["labels"]
    conf = stats["confusion"]
    width = max([8] + [len(t) + 1 for t in labels])
    lines.append("")
    lines.append("Confusion Matrix (rows gold, cols predicted):")
    lines.append("gold\\pred".ljust(width) + "".join(f"{t:>{width}}" for t in labels))
    for i, t in enumerate(labels):
        lines.append(t.ljust(width) + "".join(f"{int(n):>{width}}" for n in conf[i]))
    return lines


def main(argv=None):
    ap = argparse.ArgumentParser(description="Tag a test file pair and report accuracy")
    ap.add_argument("--train_words", type=Path, default=Path("data/clean/train-sentences.txt"))
    ap.add_argument("--train_tags", type=Path, default=Path("data/clean/train-tags.txt"))
    ap.add_argument("--model", type=Path, default=None, help="load a saved model instead of training")
    ap.add_argument("--test_words", type=Path, default=Path("data/clean/test-sentences.txt"))
    ap.add_argument("--test_tags", type=Path, default=Path("data/clean/test-tags.txt"))
    ap.add_argument("--unseen_penalty", type=float, default=UNSEEN_PENALTY)
    ap.add_argument("--skip_invalid", action="store_true", help="skip mismatched training lines")
    ap.add_argument("--outdir", type=Path, default=Path("outputs"))
    ap.add_argument("--verbose", action="store_true", help="print every tagged line")
    args = ap.parse_args(argv)

    skipped = []
    try:
        if args.model is not None:
            hmm = HMM.load(args.model)
            print(f"[INFO] Loaded model from {args.model}")
        else:
            hmm, skipped = train_from_files(
                args.train_words, args.train_tags,
                unseen_penalty=args.unseen_penalty, skip_invalid=args.skip_invalid,
            )
    except InvalidInputError as e:
        print(f"[ERROR] {e}")
        return 1
    for ln in skipped:
        print(f"[WARN] training line {ln + 1}: word/tag count mismatch, skipped")
    print(f"[INFO] Tags: {len(hmm.tags)}  Vocabulary: {len(hmm.vocab)}")

    stats = evaluate(hmm, load_parallel(args.test_words, args.test_tags))
    lines = format_report(stats, verbose=args.verbose)
    print("\n".join(lines))

    args.outdir.mkdir(parents=True, exist_ok=True)
    out = args.outdir / "report.txt"
    out.write_text("\n".join(lines), encoding="utf-8")
    print(f"[SAVED] {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
