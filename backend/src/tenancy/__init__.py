"""Tenancy module - tenant isolation for the shared-schema database.

This module provides:
- The registry of tenant-scoped model kinds (registry)
- The per-unit-of-work active tenant (context)
- The data client interceptor and post-read validator (interceptor, validator)
- Session listeners for direct ORM use (orm_events)
- The HTTP boundary binding the tenant per request (middleware)

Rows of another tenant are reported as "not found" (404), never 403.
"""
