"""
Code generation: fragment collection, script assembly and the export cache.
"""
