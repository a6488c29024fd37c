"""
Book catalog domain: models, validation, query handling and storage.
"""
