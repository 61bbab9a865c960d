"""Utility functions and tools used across the crtreco package.

- `config`: Configuration file parsing (includes, dot-notation overrides)
- `factory`: Generic factory pattern implementations
- `logger`: Logging utilities and configuration
- `globals`: Global constants
- `enums`: Enumerated types and their configuration parser
"""
