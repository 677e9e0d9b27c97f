"""Services package: all business logic lives here, never in routers.

Files:
  organization.py      Organizations, membership and the role checks every other service reuses
  auth.py              Login and bearer-token resolution
  user.py              Registration, self-service profile, favorites
  document.py          Documents, trash and restore
  document_version.py  Document versions and the active-version pointer
  audit.py             Append-only audit trail, written in the caller's transaction

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in services. No FastAPI imports in services.
"""
