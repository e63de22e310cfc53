"""
models/ - Domain Models
=======================
Plain dataclasses for the three stored entities.
Aggregates are derived on every read and never modelled here.
"""
