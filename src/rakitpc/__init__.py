"""RakitPC: PC component catalog and budget-based build recommendations."""

__version__ = "0.1.0"
