"""
Core expression engine, mathematical primitives, and contracts.

This module contains the foundational building blocks that are independent
of the integration front-ends (CLI, request payloads).
"""
