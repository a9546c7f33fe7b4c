"""
Core package: domain building blocks, application wiring and shared infrastructure.
"""
