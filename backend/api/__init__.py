"""
Wedding Portal API package.

Provides the FastAPI application for the client portal and admin console.
The application lives in api.app (`api.app:app` for uvicorn).
"""
