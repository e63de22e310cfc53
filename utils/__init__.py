"""
utils/ - Shared Helpers
=======================
Logging, the error taxonomy, the aggregate NULL policy and geodesy.
"""
