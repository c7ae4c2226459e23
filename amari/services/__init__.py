"""Services package — all business logic lives here, never in routers.

Files:
  applications.py  — submission, amend, verification metadata, approve/reject + publish gate
  vendor.py        — public vendor directory reads
  files.py         — document store (data URL uploads and retrieval)

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
