"""Nucleotide and protein sequence engine."""
