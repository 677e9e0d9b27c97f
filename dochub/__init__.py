"""DocHub API: multi-tenant document management service."""
