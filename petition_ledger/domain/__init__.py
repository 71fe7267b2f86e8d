"""Domain layer for the petition ledger.

Contains the pure domain models, events and errors. Nothing in this
package performs I/O or depends on the application or infrastructure
layers.
"""
