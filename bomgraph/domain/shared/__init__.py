"""
Shared kernel: base entities, aggregates, events, exceptions and value objects.
"""
