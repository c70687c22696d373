"""Input/output for hit tables, sequences and result files."""
