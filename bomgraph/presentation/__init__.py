"""
Presentation layer: view records, status messages and selection state
consumed by the rendering host.
"""
