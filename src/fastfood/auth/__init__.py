"""Authentication and authorization.

Learn: A single signed-token format serves both entry points:
1. Plain HTTP calls → `Authorization: Bearer <token>` header
2. Real-time connections → `?token=<token>` on the WebSocket handshake

Both resolve to an Identity (subject id + role) through the same verifier.
"""
