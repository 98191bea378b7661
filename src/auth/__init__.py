"""
Authentication module for the hospital admin backend.

This module provides authentication and authorization functionality including:
- Self-registration into the pending state
- Login gated on admin approval
- JWT token authentication
- Admin-only route protection
- Notification emails for registration decisions
"""
