"""Hit record model, coordinate normalization and interval clustering."""
