"""sitepdf — capture the pages listed in a link report into one merged PDF."""

__version__ = "0.1.0"
