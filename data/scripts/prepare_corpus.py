#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Prepare parallel sentence/tag files for the HMM tagger:
- Read a word/TAG corpus (one sentence per line, e.g. "The/DET dog/NOUN runs/VERB")
- Shuffle with a fixed seed and split into train/test
- Write {split}-sentences.txt and {split}-tags.txt line-aligned files
- Print a compact dataset report
"""
from __future__ import annotations
import argparse
from collections import Counter
from pathlib import Path
from typing import Dict

from hmm_tagger.data.datasets import load_tagged_corpus, split_pairs, write_split


# ---------------------------
# Reporting
# ---------------------------

def report_stats(stats: Dict[str, Dict[str, int]], tag_counts: Counter) -> None:
    print(f"\n== Splits ==")
    header = f"{'split':<6} {'sents':>7} {'tokens':>8} {'types':>7} {'avg_len':>8}"
    print(header)
    print("-"*len(header))
    for name, d in stats.items():
        print(f"{name:<6} {d['n_sents']:>7} {d['n_tokens']:>8} {d['n_types']:>7} {d['avg_len']:>8}")
    print(f"\n== Tags ({len(tag_counts)}) ==")
    for tag, n in tag_counts.most_common():
        print(f"{tag:<8} {n:>7}")


# ---------------------------
# Main
# ---------------------------

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--corpus", type=Path, default=Path("data/raw/tagged.txt"))
    ap.add_argument("--clean_dir", type=Path, default=Path("data/clean"))
    ap.add_argument("--sep", default="/", help="word/tag separator inside a token")
    ap.add_argument("--train_frac", type=float, default=0.9)
    ap.add_argument("--seed", type=int, default=13)
    args = ap.parse_args()

    pairs = load_tagged_corpus(args.corpus, sep=args.sep)
    if not pairs:
        raise SystemExit(f"[ERROR] no sentences in {args.corpus}")
    splits = split_pairs(pairs, args.seed, args.train_frac)

    stats = {name: write_split(name, sp, args.clean_dir) for name, sp in splits.items()}
    tag_counts = Counter(t for _, tags in pairs for t in tags)
    report_stats(stats, tag_counts)

    if not splits["test"]:
        print("\n[WARN] Test split is empty; lower --train_frac.")
    else:
        print(f"\n[OK] Parallel files written to {args.clean_dir}/{{train,test}}-{{sentences,tags}}.txt")

if __name__ == "__main__":
    main()
