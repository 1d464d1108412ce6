"""
parsers/ - Input Parsing
========================
Pure functions turning raw command arguments into validated values.
"""
