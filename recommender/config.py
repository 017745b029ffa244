"""Recommender options and their validation."""

import sys
from dataclasses import asdict, dataclass, fields

from recommender.exceptions import ConfigurationError

# option names used by camelCase snapshots
SNAPSHOT_OPTION_NAMES = {
    "maxVectorSize": "max_vector_size",
    "maxSimilarDocuments": "max_similar_documents",
    "minScore": "min_score",
}


def _is_int(value) -> bool:
    # bool is an int subclass, but True is not a vector size
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class RecommenderConfig:
    """Options for training and querying.

    max_vector_size: how many top-weighted terms each document vector keeps
    max_similar_documents: how many neighbors each document keeps after ranking
    min_score: neighbors must score strictly above this
    debug: emit progress messages while training
    """

    max_vector_size: int = 100
    max_similar_documents: int = sys.maxsize
    min_score: float = 0.0
    debug: bool = False

    def __post_init__(self):
        if not _is_int(self.max_vector_size) or self.max_vector_size <= 0:
            raise ConfigurationError("The option max_vector_size should be integer and greater than 0")

        if not _is_int(self.max_similar_documents) or self.max_similar_documents <= 0:
            raise ConfigurationError("The option max_similar_documents should be integer and greater than 0")

        if (not isinstance(self.min_score, (int, float)) or isinstance(self.min_score, bool)
                or not 0 <= self.min_score <= 1):
            raise ConfigurationError("The option min_score should be a number between 0 and 1")

        if not isinstance(self.debug, bool):
            raise ConfigurationError("The option debug should be a boolean")

    @classmethod
    def from_options(cls, **options) -> "RecommenderConfig":
        """Build a config from keyword options laid over the defaults."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigurationError(f"Unknown option(s): {', '.join(unknown)}")
        return cls(**options)

    @classmethod
    def from_snapshot(cls, options: dict) -> "RecommenderConfig":
        """Build a config from exported options, accepting camelCase names too."""
        renamed = {}
        for name, value in options.items():
            field_name = SNAPSHOT_OPTION_NAMES.get(name, name)
            if field_name in renamed:
                raise ConfigurationError(f"Option {field_name} is given twice")
            renamed[field_name] = value
        return cls.from_options(**renamed)

    def to_dict(self) -> dict:
        return asdict(self)
