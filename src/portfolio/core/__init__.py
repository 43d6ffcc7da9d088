"""Pure content and navigation logic.

Everything in this package works on already-fetched snapshots and performs
no I/O.
"""
