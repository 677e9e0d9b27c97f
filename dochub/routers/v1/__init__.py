"""v1 router package: all /api/v1/* endpoints live here.

Files:
  auth.py               /auth (login, me)
  users.py              /users (registration, profile, favorites)
  organizations.py      /organizations (tenants, membership, invites)
  documents.py          /documents (CRUD, active version, trash, restore)
  document_versions.py  /document-versions
  audit_logs.py         /audit-logs (read-only, owners only)

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to dochub/services/.
"""
