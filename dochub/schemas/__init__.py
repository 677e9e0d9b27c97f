"""Pydantic schemas package.

Folder intent:
  common.py        CamelModel base + HealthResponse (all schemas inherit CamelModel)
  auth.py          Login request / response
  user.py          User DTOs and the favorites listing
  organization.py  Organization, membership and invite DTOs
  document.py      Document and document-version DTOs
  audit.py         Audit log entries
"""
