# Security module
from staybook.security.access_policy import Action, Actor, authorize, ensure_authorized
from staybook.security.auth import create_access_token, decode_token, get_current_actor

__all__ = [
    'Action', 'Actor', 'authorize', 'ensure_authorized',
    'create_access_token', 'decode_token', 'get_current_actor'
]
