"""
Real-time push channel for the admin approval flow.

This package provides:
- EventChannel: one open Server-Sent Events connection
- ConnectionRegistry: live channels grouped as the admin group or per-user groups
- EventDispatcher: best-effort delivery to a group with per-connection failure isolation
- IdentityResolver: role/subject of an incoming stream from its token or query
"""
