"""
Utility functions for Lambda handler operations.

This package contains reusable service functions, such as loading and
rendering the contact email templates.
"""

__all__ = ['templates']
