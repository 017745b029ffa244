# turn raw document content into stemmed unigram / bigram / trigram terms
import re
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

import nltk
from nltk.stem import PorterStemmer
from nltk.tokenize import RegexpTokenizer

NGRAM_SEPARATOR = "_"
# a "<" followed by whitespace is text, not a tag
TAG_RE = re.compile(r"<[^\s<>][^<>]*>")


def load_stopwords(language: str = "english") -> frozenset:
    """NLTK stopword list for `language`, downloading the corpus on first use."""
    # make sure stopwords exist
    try:
        nltk.data.find("corpora/stopwords")
    except LookupError:
        nltk.download("stopwords", quiet=True)

    from nltk.corpus import stopwords
    return frozenset(stopwords.words(language))


def strip_tags(text: str) -> str:
    # a space, not "", so "<b>pain</b>ful" can't merge into one word
    return TAG_RE.sub(" ", text)


def ngrams(tokens: Sequence[str], n: int) -> Iterator[Tuple[str, ...]]:
    for i in range(len(tokens) - n + 1):
        yield tuple(tokens[i:i + n])


class TextNormalizer:
    """Converts document content into the term sequence the vectorizer counts.

    The tokenizer, stemmer and stopword list are swappable. Anything with a
    ``tokenize(text)`` method works as a tokenizer, anything with ``stem(word)``
    as a stemmer, and the stopwords may be any container of words or a
    predicate ``is_stopword(word) -> bool``.
    """

    def __init__(self, tokenizer=None, stemmer=None, stopwords=None):
        self.tokenizer = tokenizer if tokenizer is not None else RegexpTokenizer(r"\w+")
        self.stemmer = stemmer if stemmer is not None else PorterStemmer()
        self._stopwords = stopwords
        self._is_stopword: Optional[Callable[[str], bool]] = None

    @property
    def is_stopword(self) -> Callable[[str], bool]:
        # the NLTK corpus is only touched when the first document comes through
        if self._is_stopword is None:
            stop = self._stopwords if self._stopwords is not None else load_stopwords()
            self._is_stopword = stop if callable(stop) else frozenset(stop).__contains__
        return self._is_stopword

    def tokenize(self, content: str) -> List[str]:
        return list(self.tokenizer.tokenize(strip_tags(content).lower()))

    def _join_windows(self, windows: Iterable[Tuple[str, ...]]) -> List[str]:
        is_stop = self.is_stopword
        stem = self.stemmer.stem
        # a window touching any stopword is dropped whole
        return [
            NGRAM_SEPARATOR.join(stem(token) for token in window)
            for window in windows
            if not any(is_stop(token) for token in window)
        ]

    def normalize(self, content: str) -> List[str]:
        tokens = self.tokenize(content)
        is_stop = self.is_stopword
        stem = self.stemmer.stem

        unigrams = [stem(token) for token in tokens if not is_stop(token)]
        # windows come from the stream before stopword removal
        bigrams = self._join_windows(ngrams(tokens, 2))
        trigrams = self._join_windows(ngrams(tokens, 3))

        return unigrams + bigrams + trigrams

    __call__ = normalize
