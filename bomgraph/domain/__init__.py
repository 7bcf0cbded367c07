"""
Domain layer of the BOM graph engine.

Pure in-memory model: no I/O, no persistence.
"""
