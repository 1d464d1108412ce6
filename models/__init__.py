"""
models/ - Domain Layer
======================
Plain dataclasses and typed errors shared by every other layer.
No database or Telegram imports live here.
"""
