"""
Marketplace domain layer: entities, value objects and domain services.
"""
