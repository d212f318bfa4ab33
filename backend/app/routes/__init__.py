# Routes package init
"""
User Registry Backend — API Routes Package
============================================

Route Inventory:
    - users.py:   GET/POST        /api/users
                  GET/PUT/DELETE  /api/users/{id}
    - health.py:  GET /health, GET /health/ready

Design Principle:
    Routes are THIN: extract raw input, call UserService, turn the returned
    HandlerResult into a response. Validation and error classification live
    in the service layer.
"""
