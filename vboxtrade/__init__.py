"""VBOX Trade - price alerts for the commodity marketplace."""

__version__ = "0.1.0"
