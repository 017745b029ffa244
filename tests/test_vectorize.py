"""Unit tests for the TF-IDF corpus vectorizer."""

import math

import pytest

from recommender.config import RecommenderConfig
from recommender.document import DocumentRecord
from recommender.vectorize import CorpusVectorizer, inverse_document_frequency


def records(*token_lists):
    return [DocumentRecord(id=i, tokens=list(tokens)) for i, tokens in enumerate(token_lists)]


@pytest.fixture
def vectorizer():
    return CorpusVectorizer(RecommenderConfig())


class TestTfIdf:

    def test_weights(self, vectorizer):
        vectors = vectorizer.fit_transform(records(["a", "a", "b"], ["b", "c"]))

        # df(a) = 1, df(b) = 2, df(c) = 1, N = 2
        assert vectors[0]["a"] == pytest.approx(2 * (1 + math.log(2 / 2)))
        assert vectors[0]["b"] == pytest.approx(1 + math.log(2 / 3))
        assert vectors[1]["c"] == pytest.approx(1.0)
        assert "c" not in vectors[0]

    def test_idf_is_positive_for_terms_in_every_document(self):
        idf = inverse_document_frequency([3, 3], 3)

        assert (idf > 0).all()

    def test_idf_comes_from_each_call(self, vectorizer):
        first = vectorizer.fit_transform(records(["a"], ["b"]))
        second = vectorizer.fit_transform(records(["a"], ["b"], ["c"]))

        assert first[0]["a"] == pytest.approx(1 + math.log(2 / 2))
        assert second[0]["a"] == pytest.approx(1 + math.log(3 / 2))

    def test_one_vector_per_document_in_order(self, vectorizer):
        vectors = vectorizer.fit_transform(records(["x"], ["y"], ["z"]))

        assert [list(v) for v in vectors] == [["x"], ["y"], ["z"]]


class TestCapping:

    def test_keeps_highest_weights(self):
        vectorizer = CorpusVectorizer(RecommenderConfig(max_vector_size=1))

        vectors = vectorizer.fit_transform(records(["a", "a", "b"], ["b", "c"]))

        assert vectors[0].to_dict().keys() == {"a"}
        assert vectors[1].to_dict().keys() == {"c"}

    def test_ties_keep_first_seen_term(self):
        vectorizer = CorpusVectorizer(RecommenderConfig(max_vector_size=1))

        assert list(vectorizer.fit_transform(records(["x", "y"]))[0]) == ["x"]
        assert list(vectorizer.fit_transform(records(["y", "x"]))[0]) == ["y"]

    def test_vector_ordered_by_weight(self):
        vectorizer = CorpusVectorizer(RecommenderConfig(max_vector_size=10))

        vector = vectorizer.fit_transform(records(["b", "a", "a", "c", "c", "c"]))[0]

        assert list(vector) == ["c", "a", "b"]

    def test_small_documents_keep_every_term(self):
        vectorizer = CorpusVectorizer(RecommenderConfig(max_vector_size=50))

        vector = vectorizer.fit_transform(records(["a", "b", "c"]))[0]

        assert len(vector) == 3


class TestEmptyDocuments:

    def test_document_without_terms_gets_empty_vector(self, vectorizer):
        vectors = vectorizer.fit_transform(records([], ["a"]))

        assert len(vectors[0]) == 0
        assert len(vectors[1]) == 1

    def test_corpus_without_terms(self, vectorizer):
        vectors = vectorizer.fit_transform(records([], []))

        assert [len(v) for v in vectors] == [0, 0]

    def test_empty_corpus(self, vectorizer):
        assert vectorizer.fit_transform([]) == []
