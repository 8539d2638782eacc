"""
Utility functions and helpers.

Modules:
- files: Text file reading and writing
- log: Console logging setup
"""
