"""
Repository layer.

Repositories translate validated operations into parameterized SQL and
map rows back to schema objects.  They know nothing about validation
or HTTP; storage problems surface as ``StorageError`` or the structured
``ConstraintViolation`` from ``core.db``.
"""
