"""Issue a development access token for a user id (random if omitted).

Usage: python scripts/issue_token.py [user-uuid]
"""
import sys
import uuid

sys.path.insert(0, ".")
from masterly.kernel.identity.jwt import get_jwt_manager

user_id = uuid.UUID(sys.argv[1]) if len(sys.argv) > 1 else uuid.uuid4()
token, expires_at, _ = get_jwt_manager().create_access_token(user_id)
print(f"User:    {user_id}")
print(f"Expires: {expires_at.isoformat()}")
print(f"Token:   {token}")
