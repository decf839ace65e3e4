"""
Movie Catalog Application Package.

This package contains the catalog service, HTTP API, database operations,
Streamlit UI and shared utilities.
"""

__version__ = "1.0.0"
