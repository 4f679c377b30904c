"""End-to-end browser tests for the-internet.herokuapp.com."""

__version__ = "0.1.0"
