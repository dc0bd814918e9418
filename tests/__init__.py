"""
Test suite for numint

Contains:
- tests/unit/          : Unit tests for expression engine, integrator, contracts and CLI
"""
