"""Services package — all business logic lives here, never in routers or resolvers.

Files:
  book.py  — Book lookups and query-by-example matching

Rule: routers/resolvers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
