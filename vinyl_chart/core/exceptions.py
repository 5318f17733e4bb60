"""
Exception hierarchy for Vinyl Chart.

Every failure in the pipeline is fatal: the run stops and the operator fixes
the input or the configuration before running again.
"""


class VinylChartError(Exception):
    """Base class for all pipeline errors."""


class DataError(VinylChartError):
    """Input table is missing columns, has missing values, or invalid ranks."""


class ConfigError(VinylChartError):
    """A required design constant is missing or unusable."""


class RenderError(VinylChartError):
    """The rendered chart could not be written."""
