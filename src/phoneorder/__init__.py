"""phoneorder - phone-order entry backend with a pure order total engine."""

__version__ = "0.1.0"
