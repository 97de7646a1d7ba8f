"""
Built-in style rules.

Importing this package registers every rule with the global registry.
"""

# Import all rules to register them
from flintpp.rules import calls, headers, style

__all__ = [
    "calls",
    "headers",
    "style",
]
