"""
Tokenizer for TF-IDF text processing.

Tokenization rules (applied at the current position, strictly forward):
1. Skip whitespace
2. End of input → no more tokens
3. Digit run → one token, verbatim ("2024")
4. Letter → alphanumeric run, ASCII letters uppercased ("gl4" → "GL4")
5. Anything else → single-character token, verbatim ("(", "." ...)

No stemming, no stopwords: "cats" and "cat" are different terms.

Examples:
    >>> tokenize("glBindBuffer(target, 0)")
    ['GLBINDBUFFER', '(', 'TARGET', ',', '0', ')']

    >>> tokenize("12ab")
    ['12', 'AB']
"""

import unicodedata
from typing import Callable, Iterator, List, Optional

# Unicode general categories Nd (decimal), Nl (letter number), No (other number)
NUMERIC_CATEGORIES = ("Nd", "Nl", "No")


def _ascii_upper(text: str) -> str:
    # str.upper() would also fold non-ASCII letters ("ß" → "SS")
    return "".join(ch.upper() if ch.isascii() else ch for ch in text)


def _is_numeric(ch: str) -> bool:
    # Number categories only; str.isnumeric() also accepts CJK numeral letters like "一"
    return unicodedata.category(ch) in NUMERIC_CATEGORIES


def _is_alphanumeric(ch: str) -> bool:
    return ch.isalpha() or _is_numeric(ch)


class Lexer:
    """
    Single-pass lexer over a text.

    Each call to next_token() consumes a prefix of the remaining input.
    To scan the same text again, create a new Lexer.
    """

    def __init__(self, content: str):
        self.content = content
        self.pos = 0

    def _trim_left(self):
        while self.pos < len(self.content) and self.content[self.pos].isspace():
            self.pos += 1

    def _chop(self, n: int) -> str:
        token = self.content[self.pos:self.pos + n]
        self.pos += n
        return token

    def _chop_while(self, predicate: Callable[[str], bool]) -> str:
        n = 0
        while self.pos + n < len(self.content) and predicate(self.content[self.pos + n]):
            n += 1
        return self._chop(n)

    def next_token(self) -> Optional[str]:
        """Return the next token, or None when the input is exhausted."""
        self._trim_left()
        if self.pos >= len(self.content):
            return None

        current = self.content[self.pos]

        if _is_numeric(current):
            return self._chop_while(_is_numeric)

        if current.isalpha():
            return _ascii_upper(self._chop_while(_is_alphanumeric))

        return self._chop(1)

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token


def tokenize(text: str) -> List[str]:
    """
    Tokenize text into normalized terms.

    Args:
        text: Input text (document content or query)

    Returns:
        List of tokens in input order (empty for empty/whitespace-only text)

    Examples:
        >>> tokenize("the cat sat")
        ['THE', 'CAT', 'SAT']

        >>> tokenize("   ")
        []
    """
    if not text:
        return []
    return list(Lexer(text))
