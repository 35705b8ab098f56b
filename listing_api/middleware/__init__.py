"""
Listing API — Middleware Package
================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID first, so every log line of the request can carry it
    - Logging records status and duration once the response exists
"""
