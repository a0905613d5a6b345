"""
auth — User authentication module.

Provides:
  • Signed access token issue & verification (``TokenService``)
  • Password hashing (bcrypt)
  • Credential store backed by the ``users`` table
  • Register / Login / Me API routes
  • ``get_current_identity`` FastAPI dependency (the auth gate)
"""
