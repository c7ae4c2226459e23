"""Routers package — HTTP endpoint definitions.

Files:
  deps.py  — session lookup + role dependencies
  v1/      — Versioned API routes (/api/v1/*)
"""
