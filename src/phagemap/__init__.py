"""phagemap - Prophage region discovery from phage-protein alignment hits."""

__version__ = "0.1.0"
