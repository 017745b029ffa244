"""
All-pairs cosine similarity, filtered, ranked and truncated per document.

Self mode scores every unordered pair of one corpus once; cross mode scores the
full cartesian product of two corpora. Either way a qualifying pair is recorded
on both sides with the same score. The comparison is exact and O(n^2): large
corpora need sharding or candidate pruning outside this module.
"""

import logging
from typing import Dict, Hashable, List, Optional, Sequence, Tuple

import numpy as np
from joblib import Parallel, delayed
from scipy import sparse
from sklearn.metrics.pairwise import cosine_similarity

from recommender.config import RecommenderConfig
from recommender.exceptions import TrainingCancelled, ValidationError
from recommender.vectors import SparseVector, build_vocabulary, to_matrix

logger = logging.getLogger(__name__)

Pair = Tuple[int, int, float]


def score_rows(rows: range, matrix: sparse.csr_matrix, targets: Optional[sparse.csr_matrix],
               min_score: float) -> List[Pair]:
    """Score one batch of rows.

    With ``targets`` of None, row i is compared against rows [0, i) of ``matrix``
    (self mode); otherwise against every target row. Only pairs above
    ``min_score`` come back, in row-major order.
    """
    block = matrix[rows.start:rows.stop]
    peers = matrix[:rows.stop] if targets is None else targets
    if block.shape[0] == 0 or peers.shape[0] == 0 or matrix.shape[1] == 0:
        return []

    scores = np.minimum(cosine_similarity(block, peers), 1.0)

    # empty documents score 0 against everything
    scores[block.getnnz(axis=1) == 0, :] = 0.0
    scores[:, peers.getnnz(axis=1) == 0] = 0.0

    keep = scores > min_score
    if targets is None:
        keep &= np.arange(peers.shape[0])[None, :] < np.arange(rows.start, rows.stop)[:, None]

    local_rows, cols = np.nonzero(keep)
    return [(rows.start + int(r), int(c), float(scores[r, c])) for r, c in zip(local_rows, cols)]


class SimilarityEngine:

    def __init__(self, config: RecommenderConfig, n_jobs: int = 1, batch_size: int = 64):
        if batch_size <= 0:
            raise ValueError("batch_size should be greater than 0")
        self.config = config
        self.n_jobs = n_jobs
        self.batch_size = batch_size

    def self_similarities(self, ids: Sequence[Hashable], vectors: Sequence[SparseVector],
                          cancel_event=None) -> Dict[Hashable, List[dict]]:
        accumulated = {doc_id: [] for doc_id in ids}

        for i, j, score in self._score(vectors, None, cancel_event):
            accumulated[ids[i]].append((j, ids[j], score))
            accumulated[ids[j]].append((i, ids[i], score))

        return self._rank(accumulated)

    def cross_similarities(self, ids: Sequence[Hashable], vectors: Sequence[SparseVector],
                           target_ids: Sequence[Hashable], target_vectors: Sequence[SparseVector],
                           cancel_event=None) -> Dict[Hashable, List[dict]]:
        overlap = set(ids) & set(target_ids)
        if overlap:
            raise ValidationError(
                f"Cross similarity needs disjoint id sets, both contain: {sorted(map(str, overlap))}"
            )

        accumulated = {doc_id: [] for doc_id in ids}
        accumulated.update({doc_id: [] for doc_id in target_ids})
        offset = len(ids)

        for i, j, score in self._score(vectors, target_vectors, cancel_event):
            accumulated[ids[i]].append((offset + j, target_ids[j], score))
            accumulated[target_ids[j]].append((i, ids[i], score))

        return self._rank(accumulated)

    def _batches(self, n_rows: int) -> List[range]:
        return [range(start, min(start + self.batch_size, n_rows))
                for start in range(0, n_rows, self.batch_size)]

    def _score(self, vectors, target_vectors, cancel_event) -> List[Pair]:
        batches = self._batches(len(vectors))
        min_score = self.config.min_score

        # one column space for both sides
        vocabulary = build_vocabulary(vectors, target_vectors or [])
        matrix = to_matrix(vectors, vocabulary)
        targets = None if target_vectors is None else to_matrix(target_vectors, vocabulary)

        if self.n_jobs == 1:
            # lazy, so a cancelled run stops before scoring the next batch
            results = (score_rows(rows, matrix, targets, min_score) for rows in batches)
        else:
            results = Parallel(n_jobs=self.n_jobs, return_as="generator")(
                delayed(score_rows)(rows, matrix, targets, min_score) for rows in batches
            )

        pairs = []
        # results arrive in batch order, so the merge matches a sequential run
        for rows in batches:
            if cancel_event is not None and cancel_event.is_set():
                raise TrainingCancelled("Similarity calculation was cancelled")
            pairs.extend(next(results))
            if self.config.debug:
                logger.info("Calculated similarity scores for documents %d-%d", rows.start, rows.stop - 1)
        return pairs

    def _rank(self, accumulated) -> Dict[Hashable, List[dict]]:
        limit = self.config.max_similar_documents
        ranked = {}
        for doc_id, entries in accumulated.items():
            # peer position breaks ties, same as a stable sort of insertion order
            entries.sort(key=lambda entry: (-entry[2], entry[0]))
            ranked[doc_id] = [{"id": peer_id, "score": score} for _, peer_id, score in entries[:limit]]
        return ranked
