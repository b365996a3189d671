# Middleware package init
"""
Routedoc — Middleware Package
===============================

What:  Cross-cutting concerns applied to every request before it reaches the
       route tree.

Middleware Chain (order matters!):
    Request → [Request ID] → [Access Log] → [CORS] → Dispatcher

    1. Request ID: correlation ID shared by every log line of the request
    2. Access Log: method, path, status and duration, tagged with the ID
"""
