"""Composition root for wiring ledger dependencies.

This package centralizes infrastructure-aware wiring so that callers can
depend on the controller and query service without importing stubs or
adapters directly.
"""
