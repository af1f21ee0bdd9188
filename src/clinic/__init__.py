"""Clinic intake and admin dashboard library.

Shared code for the public booking form and the admin data workflow:
- models: Pydantic models for booking requests, contact messages, auth results
- services: Record Store client, auth gate, contact form and dashboard workflows
- utils: logging, JWT and formatting helpers
"""

__version__ = "0.1.0"
