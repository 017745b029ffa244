"""Sparse term-weight vectors and cosine similarity between them."""

from typing import Dict, Iterator, Mapping, Optional, Sequence, Tuple

import numpy as np
from scipy import sparse
from sklearn.metrics.pairwise import cosine_similarity


class SparseVector:
    """An immutable term -> weight mapping; absent terms weigh 0.

    Weights must be non-negative, which keeps cosine similarity in [0, 1].
    """

    __slots__ = ("_weights", "_norm")

    def __init__(self, weights: Mapping[str, float] = None):
        items = dict(weights or {})
        values = np.fromiter(items.values(), dtype=float, count=len(items))
        if values.size and (values < 0).any():
            raise ValueError("SparseVector weights must be non-negative")

        self._weights: Dict[str, float] = {term: float(w) for term, w in items.items()}
        self._norm = float(np.linalg.norm(values)) if values.size else 0.0

    @property
    def norm(self) -> float:
        return self._norm

    def __len__(self) -> int:
        return len(self._weights)

    def __contains__(self, term) -> bool:
        return term in self._weights

    def __getitem__(self, term: str) -> float:
        return self._weights.get(term, 0.0)

    def __iter__(self) -> Iterator[str]:
        return iter(self._weights)

    def __eq__(self, other) -> bool:
        if not isinstance(other, SparseVector):
            return NotImplemented
        return self._weights == other._weights

    def __repr__(self) -> str:
        return f"SparseVector({len(self)} terms, norm={self._norm:.4f})"

    def items(self) -> Iterator[Tuple[str, float]]:
        return iter(self._weights.items())

    def to_dict(self) -> Dict[str, float]:
        return dict(self._weights)

    def dot(self, other: "SparseVector") -> float:
        """Dot product over the terms both vectors share."""
        matrix = to_matrix([self, other])
        return float(matrix[0].multiply(matrix[1]).sum())

    def similarity(self, other: "SparseVector") -> float:
        """Cosine similarity; an empty (zero-norm) side scores 0 even against itself."""
        if not self._norm or not other._norm:
            return 0.0
        matrix = to_matrix([self, other])
        # rounding can push identical vectors a hair past 1
        return min(float(cosine_similarity(matrix[0], matrix[1])[0, 0]), 1.0)


def build_vocabulary(*vector_sets: Sequence[SparseVector]) -> Dict[str, int]:
    """Column index per term, in sorted term order."""
    terms = set()
    for vectors in vector_sets:
        for vector in vectors:
            terms.update(vector)
    return {term: column for column, term in enumerate(sorted(terms))}


def to_matrix(vectors: Sequence[SparseVector], vocabulary: Optional[Dict[str, int]] = None) -> sparse.csr_matrix:
    """Stack vectors as CSR rows over a shared vocabulary."""
    if vocabulary is None:
        vocabulary = build_vocabulary(vectors)

    indptr = [0]
    indices = []
    data = []
    for vector in vectors:
        for term, weight in vector.items():
            indices.append(vocabulary[term])
            data.append(weight)
        indptr.append(len(indices))

    matrix = sparse.csr_matrix(
        (np.asarray(data, dtype=float), np.asarray(indices, dtype=np.int64), np.asarray(indptr, dtype=np.int64)),
        shape=(len(vectors), len(vocabulary)),
    )
    matrix.sort_indices()
    return matrix
