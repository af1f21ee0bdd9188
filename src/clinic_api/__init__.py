"""FastAPI application for the clinic intake and admin dashboard endpoints."""
