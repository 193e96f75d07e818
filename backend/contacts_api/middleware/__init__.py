# Middleware package init
"""
Contacts API - Middleware Package
==================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the access log line carries it; the response
    passes back through the same chain in reverse. Exceptions that escape the
    routes become a 500 in Logging, so they still pass back through Request ID.
"""
