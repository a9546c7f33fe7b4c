"""
Marketplace application layer: ports and use cases.
"""
