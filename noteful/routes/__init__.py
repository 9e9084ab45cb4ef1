"""
Noteful API: Routes Package
===========================

Route Inventory (resource routers mounted under settings.api_prefix):
    - folders.py: GET/POST /folders, GET/PUT/DELETE /folders/{id}
    - tags.py:    GET/POST /tags,    GET/PUT/DELETE /tags/{id}
    - notes.py:   GET/POST /notes,   GET/PUT/DELETE /notes/{id}
    - health.py:  GET /health

Routes are thin: parse the request, call a service with the injected
session, set status code and headers.
"""
