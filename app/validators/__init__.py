"""
app/validators package marker.
"""

from app.validators.field_coercer import FieldCoercer

__all__ = [
    "FieldCoercer",
]
