"""Routers package — HTTP endpoint definitions.

Files:
  v1/  — Versioned read-only REST routes (/api/v1/*); GraphQL lives in graphql_qbe.graphql
"""
