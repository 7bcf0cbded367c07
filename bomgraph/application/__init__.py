"""
Application layer: use cases composed from the BOM domain.
"""
