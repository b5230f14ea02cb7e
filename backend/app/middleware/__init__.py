# Middleware package init
"""
HealthTrack Backend — Middleware Package
=========================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: Generate correlation ID for logging and error bodies
    2. Logging: Log request details with the request ID and, on protected
       routes, the authenticated user id
    3. CORS: Applied by FastAPI's CORSMiddleware (handles preflight)
"""
