"""Official style guide for Elixir and Phoenix projects at Fresha."""

__version__ = "2.0.0"
