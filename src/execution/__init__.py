"""Plan execution layer.

This module turns policy decisions into ordered create/destroy actions,
submits them to the volume manager, and reports every outcome.
"""
