"""Dataset inventory layer.

This module learns the current dataset and snapshot state from zfs.
It turns raw listings into the typed model used by the policy layer.
"""
