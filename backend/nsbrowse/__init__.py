"""nsbrowse — browse view over a tiered distributed file namespace."""

__version__ = "0.1.0"
