"""
FastAPI RESTful API for the Book Catalog.

This module provides a REST API for:
- Creating, reading, updating and deleting books
- Filtering by author, year and availability
- Paginated book listings
"""
