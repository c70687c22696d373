"""Genome format converters producing a normalized FASTA for alignment."""
