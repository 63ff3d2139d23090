"""Core gameplay primitives (events emitted while a game is played).

Kept free of FastAPI and Redis concerns so it can be reused by API routes and tests.
"""
