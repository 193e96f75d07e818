# Routes package init
"""
Contacts API - Routes Package
==============================

Route Inventory:
    - contacts.py:  GET/POST /contacts, GET/PUT/DELETE /contacts/{id}
    - health.py:    GET /health

Routes stay thin: read the request, call a service, pick the status code.
"""
