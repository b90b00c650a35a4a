"""Shared middleware for cross-cutting concerns.

This module contains the tenant context value object and its resolution
probe, shared by every bounded context that touches tenant-owned data.
"""
