"""
ContentBasedRecommender: train once on a corpus, then query related documents.

    recommender = ContentBasedRecommender(min_score=0.1, max_similar_documents=100)
    recommender.train([{"id": "1", "content": "..."}, ...])
    recommender.get_similar_documents("1", 0, 10)

A trained model is just the neighbor-list mapping plus the config it was
built with; export()/import_snapshot() move that pair around as plain data.
"""

import copy
import logging
import threading
from pathlib import Path
from typing import Dict, Hashable, List, Mapping, Optional, Sequence, Union

import joblib

from recommender.config import RecommenderConfig
from recommender.document import DocumentRecord, validate_documents
from recommender.exceptions import ValidationError
from recommender.preprocess import TextNormalizer
from recommender.similarity import SimilarityEngine
from recommender.vectorize import CorpusVectorizer

logger = logging.getLogger(__name__)

NeighborLists = Dict[Hashable, List[dict]]


class ContentBasedRecommender:

    def __init__(self, normalizer: Optional[TextNormalizer] = None, n_jobs: int = 1, **options):
        self.config = RecommenderConfig.from_options(**options)
        self.normalizer = normalizer if normalizer is not None else TextNormalizer()
        self.n_jobs = n_jobs
        self.data: NeighborLists = {}
        self._write_lock = threading.Lock()

    @property
    def options(self) -> dict:
        return self.config.to_dict()

    @property
    def documents(self) -> List[Hashable]:
        """Ids of every document the current model knows about."""
        return list(self.data)

    def set_options(self, **options) -> None:
        """Replace the config; options not given fall back to their defaults."""
        config = RecommenderConfig.from_options(**options)
        with self._write_lock:
            self.config = config

    validate_documents = staticmethod(validate_documents)

    def train(self, documents: Sequence[Mapping], cancel_event=None) -> None:
        """Rebuild the neighbor lists from one corpus, comparing every pair once."""
        validate_documents(documents)
        config = self.config

        if config.debug:
            logger.info("Total documents: %d", len(documents))

        records = self._preprocess_documents(documents, config)
        self._produce_word_vectors(records, config)

        engine = SimilarityEngine(config, n_jobs=self.n_jobs)
        data = engine.self_similarities([r.id for r in records], [r.vector for r in records], cancel_event)
        self._swap(data)

    def train_cross(self, documents: Sequence[Mapping], target_documents: Sequence[Mapping],
                    cancel_event=None) -> None:
        """Rebuild the neighbor lists between two corpora, e.g. articles and products.

        Each document only gets neighbors from the other set. Term weights are
        learned over both sets together, and ids must not repeat across them.
        """
        validate_documents(documents)
        validate_documents(target_documents)
        overlap = {doc["id"] for doc in documents} & {doc["id"] for doc in target_documents}
        if overlap:
            raise ValidationError(f"Document ids must differ across the two sets, both contain: "
                                  f"{sorted(map(str, overlap))}")
        config = self.config

        if config.debug:
            logger.info("Total documents: %d + %d targets", len(documents), len(target_documents))

        records = self._preprocess_documents(documents, config)
        target_records = self._preprocess_documents(target_documents, config)
        self._produce_word_vectors(records + target_records, config)

        engine = SimilarityEngine(config, n_jobs=self.n_jobs)
        data = engine.cross_similarities(
            [r.id for r in records], [r.vector for r in records],
            [r.id for r in target_records], [r.vector for r in target_records],
            cancel_event,
        )
        self._swap(data)

    def get_similar_documents(self, doc_id: Hashable, offset: int = 0, limit: Optional[int] = None) -> List[dict]:
        if offset < 0:
            raise ValueError("offset should not be negative")
        if limit is not None and limit < 0:
            raise ValueError("limit should not be negative")

        try:
            similar = self.data.get(doc_id)
        except TypeError:
            # unhashable ids can't have been trained
            return []
        if similar is None:
            return []

        end = offset + limit if limit is not None else None
        return [dict(entry) for entry in similar[offset:end]]

    def export(self) -> dict:
        with self._write_lock:
            return {
                "config": self.config.to_dict(),
                "data": copy.deepcopy(self.data),
            }

    def import_snapshot(self, snapshot: Mapping) -> None:
        """Load a snapshot produced by export(). Neighbor data is trusted as is.

        Snapshots keyed ``options`` with camelCase names (maxVectorSize,
        maxSimilarDocuments, minScore) load the same way.
        """
        options = snapshot["config"] if "config" in snapshot else snapshot["options"]
        config = RecommenderConfig.from_snapshot(options)
        data = copy.deepcopy(dict(snapshot["data"]))
        with self._write_lock:
            self.config = config
            self.data = data

    def save(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        joblib.dump(self.export(), path)
        return path

    @classmethod
    def load(cls, path: Union[str, Path], **kwargs) -> "ContentBasedRecommender":
        recommender = cls(**kwargs)
        recommender.import_snapshot(joblib.load(path))
        return recommender

    def _swap(self, data: NeighborLists) -> None:
        with self._write_lock:
            self.data = data

    def _preprocess_documents(self, documents, config) -> List[DocumentRecord]:
        if config.debug:
            logger.info("Preprocessing documents")
        return [DocumentRecord(id=doc["id"], tokens=self.normalizer.normalize(doc["content"]))
                for doc in documents]

    def _produce_word_vectors(self, records, config) -> None:
        vectors = CorpusVectorizer(config).fit_transform(records)
        for record, vector in zip(records, vectors):
            record.vector = vector
