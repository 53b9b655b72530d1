from collections import defaultdict, Counter
from types import MappingProxyType

import numpy as np


def new_counts():
    """Two-level sparse count table: row -> Counter(col)."""
    return defaultdict(Counter)


def log_normalize(table):
    """Replace every row's counts with log(count / row_total), in place.

    Rows keep their key order. Empty rows are left empty.
    """
    for row in table.values():
        if not row:
            continue
        counts = np.fromiter(row.values(), dtype=float, count=len(row))
        logs = np.log(counts / counts.sum())
        for key, lp in zip(list(row), logs):
            row[key] = float(lp)
    return table


def freeze(table):
    """Read-only view: row -> (col -> value), both levels immutable."""
    return MappingProxyType({r: MappingProxyType(dict(cols)) for r, cols in table.items()})


def row_mass(table):
    """Sum of exp(value) per row; 1.0 for every row of a normalised log table."""
    return {r: float(np.exp(np.fromiter(cols.values(), dtype=float)).sum()) for r, cols in table.items()}


def to_plain(table):
    """Nested plain dicts (for JSON)."""
    return {r: dict(cols) for r, cols in table.items()}


def check_table(obj, name):
    """Validate a decoded JSON table: str -> (str -> number). Returns error text or None."""
    if not isinstance(obj, dict):
        return f"{name} must be an object"
    for r, cols in obj.items():
        if not isinstance(cols, dict):
            return f"{name}[{r!r}] must be an object"
        for c, v in cols.items():
            if isinstance(v, bool) or not isinstance(v, (int, float)):
                return f"{name}[{r!r}][{c!r}] must be a number"
    return None
