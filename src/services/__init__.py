"""
Services package - cross-cutting behavior around the data-access layer.

This package contains:
- Audit trail recording for write procedures
"""
