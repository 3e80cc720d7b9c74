"""
Multi-Tenant Notes

Tenant-isolated notes service: token authentication, per-request tenant
scoping, admin-only plan upgrades and free-plan note quotas.
"""

__version__ = "1.0.0"
