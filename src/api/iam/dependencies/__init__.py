"""Dependency injection for IAM bounded context.

Composes infrastructure resources (database sessions, the tenant manager)
with IAM-specific components (repositories, services, the resolver).
"""
