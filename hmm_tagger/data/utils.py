from pathlib import Path


def tokenize(line, lowercase=True):
    """Strip, optionally lowercase, and split a line on whitespace."""
    line = line.strip()
    if lowercase:
        line = line.lower()
    return line.split()


def read_lines(path):
    """All lines of a UTF-8 file, blank ones included, so parallel files stay aligned."""
    return Path(path).read_text(encoding="utf-8").splitlines()


def write_lines(path, lines):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def ensure_exists(path):
    if not Path(path).is_file():
        raise FileNotFoundError(f"Missing file: {path}")
