"""
Domain Layer

Specification schema, call graph model, errors and the pure services that
move between the two representations.
"""
