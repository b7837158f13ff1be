"""Task weather: record tasks and check current weather at their location."""

__version__ = "0.1.0"
