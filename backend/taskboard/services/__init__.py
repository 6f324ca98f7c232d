"""Services Layer — stores and registries that sit between routes and the database.

Invariants:
    - Every registry operation consults core/access_policy before touching the store
    - Services commit their own unit of work; routes never commit
    - Task mutations append to the activity log (services/activity_log.py)

Design Decisions:
    - One class per store/registry, constructed per request with the request's AsyncSession
"""
