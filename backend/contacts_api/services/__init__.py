# Services package init
"""
Contacts API - Services Layer
==============================

What:  Business logic between the routes (HTTP) and MongoDB (persistence).

Service Inventory:
    - contact_validator: presence check producing a typed ContactInput
    - contact_repository: CRUD operations on the contacts collection

Both return `Ok` / `Err` results for client errors and carry no HTTP concerns,
so they can be tested without a server.
"""
