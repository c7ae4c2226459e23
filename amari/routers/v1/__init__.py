"""v1 router package — all /api/v1/* endpoints live here.

Files:
  applications.py  — submit/amend (vendors), review/verify/decide (admins)
  vendors.py       — public directory of published vendors
  files.py         — document upload and retrieval

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to amari/services/.
"""
