"""Molecular-graph toolkit: SMILES parsing, 3D embedding, typing and bond inference."""
