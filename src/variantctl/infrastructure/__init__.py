"""Infrastructure layer — catalog document I/O.

Depends on domain only. Never imports from services, commands, or output.
"""
