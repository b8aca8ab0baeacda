"""Readers and writers for sequence and structure text formats."""
