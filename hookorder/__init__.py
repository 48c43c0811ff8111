"""Statement ordering checks and fixes for React components and custom hooks."""

__version__ = "0.1.0"
