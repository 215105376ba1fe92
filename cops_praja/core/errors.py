"""
Exam error types
"""


class ConfigurationError(Exception):
    """Required endpoint or credential is missing."""


class FetchError(Exception):
    """The question store could not be reached or refused the request."""


class EmptyResultError(Exception):
    """The question store answered but returned no questions."""


class MalformedOptionsError(ValueError):
    """A question's options field cannot be turned into a key/text mapping."""
