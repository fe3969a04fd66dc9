"""BizBot backend: chat relay and page routing filter."""

__version__ = "1.0.0"
