"""Shared fixtures: a normalizer that never touches the NLTK corpus download."""

import pytest
from nltk.stem import PorterStemmer
from nltk.tokenize import RegexpTokenizer

from recommender import ContentBasedRecommender, TextNormalizer
from recommender.preprocess import load_stopwords

STOPWORDS = frozenset("""
a about after all already am an and any are as at be because been before but by can
did do does for from get had has have he her him his how i if in is it its me my no
not now of on one or our over she so than that the them then there they this those
time to too very was we were what when which who why will with you your
""".split())

CORPUS = [
    {"id": "1000001", "content": "My uncle was murdered in front of my eyes, it was traumatizing and painful"},
    {"id": "1000002", "content": "I am finally happy, all of that pain is gone"},
    {"id": "1000003", "content": "The time when I needed them the most, no one was there"},
    {"id": "1000004", "content": "I tried to attempt suicide 3 times, depression cannot be healed it seems"},
    {"id": "1000005", "content": "I was suffering from Post traumatic stress disorder,after I was saved from drowning "},
    {"id": "1000006", "content": "Is suicide really a solution?"},
    {"id": "1000007", "content": "How Python almost killed me?"},
    {"id": "1000008", "content": "I already lost my family, I can't lose anyone else now"},
    {"id": "1000009", "content": "Why does all bad things happen to me?"},
    {"id": "1000010", "content": "Recently I had an accident which led to injure my right hand"},
    {"id": "1000011", "content": "I lost my Grandpa this year, it was horrifying and very painful to get over it."},
    {"id": "1000012", "content": "I saw my family die in a car accident, if was scary and painful"},
    {"id": "1000013", "content": "I was traumatized after the match when I lost for the first time in my life"},
]


@pytest.fixture
def stopwords():
    return STOPWORDS


@pytest.fixture
def normalizer():
    """Real NLTK tokenizer and Porter stemmer, fixed stopword list."""
    return TextNormalizer(
        tokenizer=RegexpTokenizer(r"\w+"),
        stemmer=PorterStemmer(),
        stopwords=STOPWORDS,
    )


@pytest.fixture
def nltk_stopwords():
    try:
        return load_stopwords()
    except LookupError:
        pytest.skip("NLTK stopword corpus is not available")


@pytest.fixture
def corpus():
    return [dict(doc) for doc in CORPUS]


@pytest.fixture
def make_recommender(normalizer):
    def _make(**options):
        return ContentBasedRecommender(normalizer=normalizer, **options)
    return _make


@pytest.fixture
def trained(make_recommender, corpus):
    recommender = make_recommender(min_score=0.05, max_similar_documents=100)
    recommender.train(corpus)
    return recommender
