"""
HTTP API for the call graph editor.
"""
