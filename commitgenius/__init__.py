"""commit-genius: AI commit messages from staged changes and developer notes."""

__version__ = "1.2.0"
