from recommender.config import RecommenderConfig
from recommender.exceptions import ConfigurationError, RecommenderError, TrainingCancelled, ValidationError
from recommender.model import ContentBasedRecommender
from recommender.preprocess import TextNormalizer
from recommender.vectors import SparseVector

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ContentBasedRecommender",
    "RecommenderConfig",
    "RecommenderError",
    "SparseVector",
    "TextNormalizer",
    "TrainingCancelled",
    "ValidationError",
]
