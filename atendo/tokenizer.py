"""
Sentence tokenization: raw text -> list of lexicon words.
"""
import string
from typing import List

# Punctuation that separates words rather than belonging to them
_DASHES = ('—', '–', '―')
_QUOTES = {
    '“': '"', '”': '"',
    '‘': "'", '’': "'",
    '‚': "'", '„': '"',
}


def preprocess_text(text: str) -> str:
    """
    Normalize punctuation and whitespace before splitting.

    - Converts em-dashes, en-dashes to spaces
    - Normalizes smart quotes to straight quotes
    - Normalizes whitespace
    """
    for dash in _DASHES:
        text = text.replace(dash, ' ')
    for old, new in _QUOTES.items():
        text = text.replace(old, new)
    return ' '.join(text.split())


def tokenize(text: str) -> List[str]:
    """
    Split a sentence into lowercase words.

    Punctuation (including the parentheses of ``(jack went to the store)``)
    is dropped; apostrophes and hyphens inside a word are kept.

    >>> tokenize("Jack went to the store.")
    ['jack', 'went', 'to', 'the', 'store']
    """
    text = preprocess_text(text)
    keep = {"'", "-"}
    for punct in string.punctuation:
        if punct not in keep:
            text = text.replace(punct, ' ')
    return [word.strip("'-").lower() for word in text.split() if word.strip("'-")]
