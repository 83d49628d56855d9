"""
Core application modules.
Contains essential infrastructure components:
- access: Ownership/role rules and the acting Claim
- bootstrap: Application initialization and default admin creation
- db: Database configuration and connection management
- errors: Domain error kinds mapped to HTTP responses
- lookup: Primary-key lookups that raise NotFound
- security: Password hashing and JWT verification
"""
