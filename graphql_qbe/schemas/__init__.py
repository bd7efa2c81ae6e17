"""Pydantic schemas package.

Folder intent:
  common.py  — CamelModel base + HealthResponse (all schemas inherit CamelModel)
  book.py    — Book request DTOs and response models used by the REST mirror and seeding
"""
