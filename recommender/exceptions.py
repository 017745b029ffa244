"""Errors raised by the recommender."""


class RecommenderError(Exception):
    """Base class for every error the recommender raises on its own."""


class ConfigurationError(RecommenderError, ValueError):
    """An option value has the wrong type or is out of range."""


class ValidationError(RecommenderError, ValueError):
    """The documents handed to training are malformed."""


class TrainingCancelled(RecommenderError):
    """Training was stopped through its cancel event before finishing."""
