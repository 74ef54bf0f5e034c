"""
Lexical matching used when semantic search is unavailable.

Mirrors PostgreSQL's ``to_tsvector('english') @@ plainto_tsquery('english')``:
English stop words are ignored, terms are reduced with the Snowball English
stemmer, and a document matches only if it contains every remaining query term.
"""

import logging
import re
from functools import lru_cache
from typing import FrozenSet, List, Set

import nltk
from nltk.corpus import stopwords
from nltk.stem.snowball import SnowballStemmer

logger = logging.getLogger(__name__)

_TOKEN = re.compile(r"[a-z0-9]+")

_stemmer = SnowballStemmer("english")


@lru_cache(maxsize=1)
def english_stop_words() -> FrozenSet[str]:
    """NLTK's English stop word list, fetching the corpus on first use."""
    try:
        nltk.data.find("corpora/stopwords")
    except LookupError:
        logger.info("Downloading NLTK stopwords corpus")
        nltk.download("stopwords", quiet=True)
    return frozenset(stopwords.words("english"))


@lru_cache(maxsize=4096)
def stem(token: str) -> str:
    return _stemmer.stem(token)


def _tokens(text: str) -> List[str]:
    return _TOKEN.findall((text or "").lower())


def search_terms(text: str) -> List[str]:
    """Stemmed, stop-word-free terms of a query, in order, deduplicated."""
    stop_words = english_stop_words()
    terms: List[str] = []
    for token in _tokens(text):
        if token in stop_words:
            continue
        stemmed = stem(token)
        if stemmed not in terms:
            terms.append(stemmed)
    return terms


def document_terms(text: str) -> Set[str]:
    return {stem(token) for token in _tokens(text)}


def matches_all_terms(content: str, query: str) -> bool:
    """True when every query term occurs in content. Queries of only stop words match nothing."""
    terms = search_terms(query)
    if not terms:
        return False
    available = document_terms(content)
    return all(term in available for term in terms)
