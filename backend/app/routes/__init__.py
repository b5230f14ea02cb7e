# Routes package init
"""
HealthTrack Backend — API Routes Package
=========================================

Route Inventory:
    - auth.py:           POST /register, POST /login
    - records.py:        POST /record, GET /record/{report_id}, PUT /record/{report_id}
    - questionnaires.py: POST /submit-questionnaire, GET /dlq/{dlq_id}
    - health.py:         GET  /health

Design Principle:
    Routes are THIN: extract the body/path params, resolve the caller's
    identity where required, call the service, return its schema.
    Business rules live in services.
"""
