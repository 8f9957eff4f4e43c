"""Text tokenization for the TF-IDF index."""

import re
from typing import List, Optional

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")

# Tokens of this length or shorter are dropped
MIN_TOKEN_LENGTH = 3


def tokenize(text: Optional[str]) -> List[str]:
    """Split text into lower-cased alphanumeric tokens.

    Punctuation is replaced by spaces rather than removed, so
    ``"users/{id}"`` splits into ``users`` and ``id`` instead of
    merging them.

    Args:
        text: Arbitrary text

    Returns:
        Tokens in order of appearance, each at least three characters long
    """
    if not text:
        return []

    cleaned = _NON_ALNUM.sub(" ", text.lower())
    return [token for token in cleaned.split() if len(token) >= MIN_TOKEN_LENGTH]
