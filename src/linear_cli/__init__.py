"""
linear-cli - Linear issue tracker in the terminal

Lists, searches and creates Linear issues, with a GraphQL variable
validator that keeps ``filter`` and ``includeArchived`` paired.
"""

__version__ = "0.1.0"
