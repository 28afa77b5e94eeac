"""
GitHub Stars → Notion Sync

Mirrors the repositories a GitHub user has starred into rows of a
Notion database, creating new rows and refreshing existing ones.
"""

__version__ = "1.0.0"
__author__ = "Adesh Srivastava"
