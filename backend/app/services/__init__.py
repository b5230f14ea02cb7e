# Services package init
"""
HealthTrack Backend — Services Layer
=====================================

What:  Business rules sitting between routes (HTTP) and the database.
How:   Each service is a stateless class with a module-level singleton;
       routes pass in the request's AsyncSession and get a response schema back.

Service Inventory:
    - AuthService: registration (bcrypt hash, unique email) and login (JWT issue)
    - RecordService: health record create/read/update, report ID generation
    - QuestionnaireService: batch submission under one DLQ ID, batch lookup
"""
