# Middleware package init
"""
Mflix API — Middleware Package
===============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID first so every later log line can carry the correlation ID
    - Logging measures duration and status after the handler returns
"""
