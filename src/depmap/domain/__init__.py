"""Domain layer — pure types and functions, no I/O.

Modules here may not import from infrastructure, services, or commands.
"""
