"""Aligner adapters that search contigs against a phage protein database."""
