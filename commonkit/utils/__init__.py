"""Stateless helpers (geo, serialization, text, dates, enums)."""
