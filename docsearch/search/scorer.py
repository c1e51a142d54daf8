"""
TF-IDF scoring functions.

Formula:
    tf(t, d)  = count(t, d) / total_terms(d)
    idf(t)    = log10(N / max(1, df(t)))
    score(d)  = Σ tf(t, d) × idf(t)   over query terms t

Where:
    N     = number of documents in the index
    df(t) = number of documents containing t

The denominator floor keeps idf defined for terms no document contains
(idf = log10(N)); such terms always meet tf = 0, so they never add to a score.
"""

import math

from .index_builder import TermFreq, TermFreqIndex


def tf(term: str, document: TermFreq) -> float:
    """
    Relative frequency of a term in one document.

    Returns 0.0 for an absent term and for an empty document.

    Example:
        >>> tf("A", {"A": 2, "B": 3})
        0.4
    """
    count = document.get(term, 0)
    if count == 0:
        return 0.0
    total = sum(document.values())
    if total == 0:
        return 0.0
    return count / total


def document_frequency(term: str, index: TermFreqIndex) -> int:
    """Number of indexed documents containing the term"""
    return sum(1 for table in index.values() if term in table)


def idf(term: str, index: TermFreqIndex) -> float:
    """
    Inverse document frequency of a term over the index.

    An empty index has no documents to weight, so idf is 0.0 there.

    Example:
        >>> idf("CAT", {"d1": {"CAT": 1}, "d2": {"DOG": 1}, "d3": {"DOG": 1}})
        0.47712125471966244
    """
    n = len(index)
    if n == 0:
        return 0.0
    return math.log10(n / max(1, document_frequency(term, index)))
