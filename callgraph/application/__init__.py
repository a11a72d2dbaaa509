"""
Application Layer

Ports and the services that implement the editing and generation use cases.
"""
