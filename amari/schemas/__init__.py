"""Pydantic schemas package.

Folder intent:
  common.py       — CamelModel base + HealthResponse (all schemas inherit CamelModel)
  categories.py   — vendor categories, pricing models, category-specific details union
  application.py  — application submission/amend/verification/decision DTOs + admin view
  vendor.py       — public vendor directory model
  files.py        — document store upload/response DTOs
"""
