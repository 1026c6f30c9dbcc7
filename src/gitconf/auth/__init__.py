"""Authentication strategies for the git provider.

Classes:
    AuthContext: Protocol for transport configuration of one clone.
    AnonymousAuth: Public repositories.
    UserPasswordAuth: Login and password over HTTPS.
    SshKeyAuth: Private key over SSH, through a paramiko vendor.
"""

from ._strategy import (
    AnonymousAuth,
    AuthContext,
    SshKeyAuth,
    UserPasswordAuth,
    build_auth_context,
    is_http_uri,
    load_private_key,
)

__all__ = [
    "AnonymousAuth",
    "AuthContext",
    "SshKeyAuth",
    "UserPasswordAuth",
    "build_auth_context",
    "is_http_uri",
    "load_private_key",
]
