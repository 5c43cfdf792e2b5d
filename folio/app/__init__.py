"""Application composition layer for the Tkinter GUI.

Modules in this package wire views, view models, adapters, and the portfolio
session into the desktop app without placing business logic in views.
"""
