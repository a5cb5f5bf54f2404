"""
Domain layer for contact form business logic.

This layer contains:
- Data models (type-safe structures)
- Validation, composition and response mapping
- The processing pipeline (explicit success/failure handling)
"""
