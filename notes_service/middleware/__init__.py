# Middleware package init
"""
Notes Service — Middleware Package
====================================

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first so every later log line carries the correlation id
    2. Logging measures the full downstream duration and final status
"""
