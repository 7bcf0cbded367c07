"""
Infrastructure layer: data sources for catalogs and association sets.
"""
