"""Infrastructure layer — file I/O for input tables and manifests.

Depends on the domain layer only.
"""
