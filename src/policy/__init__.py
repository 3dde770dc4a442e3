"""Snapshot policy layer.

This module decides which datasets get a new snapshot and which
existing snapshots of a retention group are expendable.
"""
