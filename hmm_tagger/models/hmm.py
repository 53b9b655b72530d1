import json
from pathlib import Path
from types import MappingProxyType

from hmm_tagger.models.errors import DecodeError, InvalidInputError
from hmm_tagger.models.tables import freeze, to_plain, check_table

START_TAG = "#"
UNSEEN_PENALTY = -100.0
FORMAT_VERSION = 1

_EMPTY = MappingProxyType({})


class HMM:
    """Finalized first-order HMM: read-only log tables plus the Viterbi decoder.

    Built by ``ModelBuilder.finalize()`` or ``HMM.load()``; never mutated afterwards,
    so one instance can serve any number of decode calls.
    """

    def __init__(self, emissions, transitions, unseen_penalty=UNSEEN_PENALTY):
        self.emissions = emissions        # tag -> {word: log P(word | tag)}
        self.transitions = transitions    # tag -> {next_tag: log P(next_tag | tag)}
        self.unseen_penalty = float(unseen_penalty)

    @property
    def tags(self):
        """Emitting tags in first-seen order."""
        return list(self.emissions)

    @property
    def vocab(self):
        seen = {}
        for row in self.emissions.values():
            seen.update(dict.fromkeys(row))
        return list(seen)

    def emission_score(self, tag, word):
        return self.emissions.get(tag, _EMPTY).get(word, self.unseen_penalty)

    def viterbi(self, words):
        """Most probable tag sequence for ``words`` (one tag per word).

        Raises DecodeError if at some position no frontier tag has an outgoing
        transition, i.e. no full path exists.
        """
        words = [w.lower() for w in words]
        scores = {START_TAG: 0.0}
        backptrs = []

        for i, word in enumerate(words):
            next_scores = {}
            back = {}
            for curr, curr_score in scores.items():
                row = self.transitions.get(curr)
                # tags never seen followed by anything have no outgoing edges
                if not row:
                    continue
                for nxt, trans_lp in row.items():
                    score = curr_score + trans_lp + self.emission_score(nxt, word)
                    if nxt not in next_scores or score > next_scores[nxt]:
                        next_scores[nxt] = score
                        back[nxt] = curr
            if not next_scores:
                raise DecodeError(i, word)
            backptrs.append(back)
            scores = next_scores

        if not words:
            return []

        # first-encountered wins ties
        tag = max(scores, key=scores.get)
        path = []
        for back in reversed(backptrs):
            path.append(tag)
            tag = back[tag]
        assert tag == START_TAG
        path.reverse()
        return path

    def tag(self, words):
        """[(word, tag), ...] for display."""
        return list(zip(words, self.viterbi(words)))

    # ---- persistence ----

    def to_dict(self):
        return {
            "format": FORMAT_VERSION,
            "unseen_penalty": self.unseen_penalty,
            "emissions": to_plain(self.emissions),
            "transitions": to_plain(self.transitions),
        }

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict) or data.get("format") != FORMAT_VERSION:
            raise InvalidInputError(f"unsupported model document (expected format {FORMAT_VERSION})")
        for name in ("emissions", "transitions"):
            err = check_table(data.get(name), name)
            if err:
                raise InvalidInputError(f"bad model document: {err}")
        penalty = data.get("unseen_penalty", UNSEEN_PENALTY)
        if isinstance(penalty, bool) or not isinstance(penalty, (int, float)):
            raise InvalidInputError("bad model document: unseen_penalty must be a number")
        return cls(freeze(data["emissions"]), freeze(data["transitions"]), unseen_penalty=penalty)

    def save(self, path):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), ensure_ascii=False, indent=1), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path):
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise InvalidInputError(f"model file {path} is not valid JSON: {e}") from e
        return cls.from_dict(data)
