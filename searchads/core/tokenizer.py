"""SEARCHADS — Keyword Tokenizer.

Titles and queries go through the same function, so an ad is found by any
word of its title regardless of case or punctuation.
"""

import re
from typing import List, Optional

# Letters and digits only; underscore counts as a separator
_TOKEN_RE = re.compile(r"[^\W_]+")


def tokenize(text: Optional[str]) -> List[str]:
    """Split text into lower-cased keywords, in the order they occur.

    Repeated words are kept. Empty or missing text yields no tokens.
    """
    if not text:
        return []
    return _TOKEN_RE.findall(text.lower())


def keyword_set(text: Optional[str]) -> List[str]:
    """Distinct keywords of a text, first-seen order."""
    return list(dict.fromkeys(tokenize(text)))
