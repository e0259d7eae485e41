"""Infrastructure layer — Markdown parsing and file access.

Infrastructure may import from domain but never from services,
commands, or output.
"""
