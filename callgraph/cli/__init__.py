"""
Command-Line Tools

    callgraph-inspect : statistics, categories and validation for a specification
    callgraph-convert : specification to JSON / simulator YAML / compose / GraphML / DOT
"""
