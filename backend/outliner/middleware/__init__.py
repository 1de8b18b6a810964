# Middleware package init
"""
Outliner Backend — Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    The request ID is set first so the access logger can include it; the
    response passes back through the chain in reverse.
"""
