"""Repositories package: all SQLAlchemy queries live here.

Files:
  base.py          BaseRepository[ModelT] (get, paginated list, create, update, soft delete, restore, hard delete)
  user.py          Users by email / username
  organization.py  Organizations (with cascading delete) and memberships
  document.py      Documents (with cascading delete) and document versions
  favorite.py      Favorite documents and organizations
  audit.py         Append-only audit log
"""
