# Middleware package init
"""
User Registry Backend — Middleware Package
============================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first: every later log line can carry it
    2. Logging: captures status and duration on the way back out
    3. GZip / CORS: FastAPI-provided, registered in main.py
"""
