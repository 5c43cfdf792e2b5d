"""ViewModel package for UI state and command surfaces.

Call context:
    ``folio/app/main.py`` imports concrete viewmodels from this package to
    bind view callbacks to state transitions.

Dependencies:
    Modules in this package depend on domain types only. File I/O and
    session orchestration remain outside.
"""
