# corpus-relative TF-IDF weights, capped per document
import logging
from typing import List, Sequence

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer

from recommender.config import RecommenderConfig
from recommender.document import DocumentRecord
from recommender.vectors import SparseVector

logger = logging.getLogger(__name__)


def _identity(tokens):
    # documents arrive already normalized
    return tokens


def inverse_document_frequency(doc_freq, n_docs: int) -> np.ndarray:
    """idf = 1 + ln(N / (1 + df)); stays positive for every term present in the corpus."""
    return 1.0 + np.log(n_docs / (1.0 + np.asarray(doc_freq, dtype=float)))


class CorpusVectorizer:
    """Builds one capped SparseVector per document from its token sequence.

    IDF is learned from the records handed to a single `fit_transform` call and
    discarded afterwards, so every training run weighs terms against its own corpus.
    """

    def __init__(self, config: RecommenderConfig):
        self.config = config

    def fit_transform(self, records: Sequence[DocumentRecord]) -> List[SparseVector]:
        if not any(record.tokens for record in records):
            return [SparseVector() for _ in records]

        counter = CountVectorizer(analyzer=_identity, lowercase=False)
        counts = counter.fit_transform([record.tokens for record in records]).tocsr()
        terms = counter.get_feature_names_out()

        # each CSR row lists a term index at most once
        doc_freq = np.bincount(counts.indices, minlength=len(terms))
        idf = inverse_document_frequency(doc_freq, counts.shape[0])

        vectors = []
        for i, record in enumerate(records):
            if self.config.debug:
                logger.info("Creating word vector for document %d", i)

            start, end = counts.indptr[i], counts.indptr[i + 1]
            vectors.append(self._top_terms(
                record.tokens,
                terms[counts.indices[start:end]],
                counts.data[start:end] * idf[counts.indices[start:end]],
            ))
        return vectors

    def _top_terms(self, tokens, row_terms, row_weights) -> SparseVector:
        if not len(row_terms):
            return SparseVector()

        first_seen = {}
        for position, token in enumerate(tokens):
            first_seen.setdefault(token, position)
        positions = np.array([first_seen[term] for term in row_terms])

        # heaviest first, earlier occurrence wins a tie
        order = np.lexsort((positions, -row_weights))[:self.config.max_vector_size]
        return SparseVector({str(row_terms[k]): float(row_weights[k]) for k in order})
