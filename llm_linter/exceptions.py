"""
Error taxonomy for the linter.

Every error is fatal for the run that raised it: the pipeline never posts
partial results, and the CLI turns any of these into a non-zero exit.
"""


class LinterError(Exception):
    """Base exception for all linter errors."""
    pass


class ParseError(LinterError):
    """Malformed unified diff or rule document."""
    pass


class ConfigError(LinterError):
    """Invalid glob pattern or missing/invalid run configuration."""
    pass


class FetchError(LinterError):
    """The diff could not be retrieved from its source."""
    pass


class ModelCallError(LinterError):
    """The language model endpoint failed or returned no usable reply."""
    pass


class ResponseError(LinterError):
    """The model reply does not match the expected finding schema."""
    pass
