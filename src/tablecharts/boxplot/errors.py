"""Configuration errors raised while preparing chart data.

All of these are recoverable: the caller reports them and skips the chart.
"""


class ChartConfigurationError(ValueError):
    """Base class for a column selection that cannot produce a chart."""


class EmptyConfigurationError(ChartConfigurationError):
    """Nothing was selected to plot."""


class InvalidConfigurationError(ChartConfigurationError):
    """A selected column name does not resolve to a column of the table."""
