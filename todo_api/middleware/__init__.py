"""
Todo API - Middleware Package
===============================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: correlation ID for every log line and error body
    2. Logging: one access line per request, with status and duration
    3. CORS: FastAPI's CORSMiddleware (handles preflight)
"""
