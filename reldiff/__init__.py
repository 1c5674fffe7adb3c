"""Count the releases between two tags of a repository and collect their notes."""

__version__ = "0.1.0"
