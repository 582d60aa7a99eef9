"""
Core contract and registry.

Important: keep this package free of network dependencies.
"""
