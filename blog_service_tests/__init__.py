"""
Tests for the blog_service package.

Environment for the service (signing secret, throwaway SQLite database,
cheap hashing) is set in ``conftest.py`` before the app is imported.
"""
