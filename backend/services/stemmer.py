"""Lightweight Porter-style suffix stripper used for fuzzy keyword matching."""

# (suffix, replacement, minimum word length). First match wins, so the
# order matters: longer and more specific suffixes come first.
_SUFFIX_RULES: tuple[tuple[str, str, int], ...] = (
    ("iness", "y", 0),
    ("ies", "y", 5),
    ("ational", "ate", 0),
    ("ization", "ize", 0),
    ("fulness", "ful", 0),
    ("ousness", "ous", 0),
    ("iveness", "ive", 0),
    ("ement", "", 0),
    ("ment", "", 0),
    ("tion", "t", 0),
    ("sion", "s", 0),
    ("ness", "", 0),
    ("able", "", 0),
    ("ible", "", 0),
    ("ally", "al", 0),
    ("ful", "", 0),
    ("ous", "", 0),
    ("ive", "", 0),
    ("ing", "", 6),
    ("ied", "y", 0),
    ("ted", "t", 6),
    ("ed", "", 5),
    ("ly", "", 5),
    ("er", "", 5),
    ("es", "", 5),
    ("al", "", 5),
)


def stem(word: str) -> str:
    """Reduce a word to an approximate root ("developing" -> "develop").

    Words of three characters or fewer are returned lowercased but
    otherwise unchanged.
    """
    w = word.lower()
    if len(w) <= 3:
        return w

    for suffix, replacement, min_len in _SUFFIX_RULES:
        if w.endswith(suffix):
            if len(w) < min_len:
                # A too-short word for this rule falls through to later rules
                continue
            return w[: -len(suffix)] + replacement

    if w.endswith("s") and not w.endswith("ss"):
        return w[:-1]
    return w
