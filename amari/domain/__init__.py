"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  application.py  — vendor listing applications (private, admin-reviewed)
  vendor.py       — published vendors (public directory rows)
  stored_file.py  — uploaded documents and photos, stored as data URLs
  audit.py        — immutable audit trail for application changes
  mixins.py       — shared timestamp columns
"""

from amari.domain.application import ApplicationStatus, VendorApplication
from amari.domain.audit import AuditTrail
from amari.domain.stored_file import FileCategory, StoredFile
from amari.domain.vendor import Vendor

__all__ = [
    "ApplicationStatus",
    "AuditTrail",
    "FileCategory",
    "StoredFile",
    "Vendor",
    "VendorApplication",
]
