"""Use-case layer for editing and persisting portfolios.

Each module coordinates domain objects and ports without performing file or
dialog I/O directly, preserving MVVM + Hexagonal boundaries.
"""
