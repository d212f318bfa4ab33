# Services package init
"""
User Registry Backend — Services Layer
========================================

Service Inventory:
    - UserStore (abstract): contract for user persistence
    - SQLUserStore: async SQLAlchemy implementation (SQLite or PostgreSQL)
    - UserService: request handlers (validate → store → HandlerResult)
    - Success / Failure: the HandlerResult sum type
"""
