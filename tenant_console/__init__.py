# tenant_console/__init__.py
"""Multi-tenant site configuration console."""
