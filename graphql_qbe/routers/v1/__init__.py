"""v1 router package — all /api/v1/* endpoints live here.

Files:
  books.py  — list, get-by-id and search-by-example over books

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to graphql_qbe/services/.
"""
