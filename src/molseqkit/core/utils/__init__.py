"""Shared helpers for fixed-width parsing and element data."""
