"""Pooled storage of JSON values, with conversion, pretty printing, stable hashing and hash joins."""

__version__ = "0.1.0"
__all__ = ["value_locator", "core_data", "convert", "pretty", "hashing", "merge"]