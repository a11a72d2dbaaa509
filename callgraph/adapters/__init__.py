"""
Adapters Layer

Infrastructure implementations of the application ports.
"""
