"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (JSON files, image
    files on disk, PDF rendering) used by use cases.

Dependencies:
    Individual submodules depend on filesystem APIs, ``reportlab`` and
    ``Pillow`` (PDF export), and domain protocol definitions.

Call context:
    Imported by ``folio.app.main`` for runtime wiring and by tests.
"""
