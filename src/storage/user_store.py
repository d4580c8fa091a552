"""
User storage layer.

Users are stored as ``:User`` nodes with a bcrypt password hash.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

import bcrypt

from ..knowledge_graph.neo4j_client import Neo4jGraphClient
from ..utils.exceptions import ConflictError
from ..utils.validators import require_fields

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserAccount:
    """A registered user (never carries the password hash)."""

    id: str
    username: str


class UserStore:
    """
    Registration and credential checks for users.
    """

    # Pre-computed dummy hash so unknown usernames still pay the bcrypt cost
    _DUMMY_HASH: bytes = bcrypt.hashpw(b"dummy", bcrypt.gensalt())

    def __init__(self, client: Neo4jGraphClient):
        self.client = client

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a plaintext password using bcrypt."""
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()

    @staticmethod
    def check_password(password: str, hashed: str) -> bool:
        """Verify a password against its bcrypt hash."""
        try:
            return bcrypt.checkpw(password.encode(), hashed.encode())
        except ValueError:
            # Malformed stored hash
            return False

    def get_by_username(self, username: str) -> Optional[dict]:
        """Return the stored user properties, or None."""
        results = self.client._execute_query(
            "MATCH (u:User {username: $username}) RETURN u",
            {"username": username},
        )
        if not results:
            return None
        return results[0]["u"]

    def create(self, username: str, password: str) -> UserAccount:
        """
        Register a new user.

        Args:
            username: Unique username
            password: Plaintext password

        Returns:
            The created account

        Raises:
            ValidationError: If username or password is blank
            ConflictError: If the username is taken
        """
        require_fields({"username": username, "password": password}, entity="user")
        username = username.strip()

        if self.get_by_username(username):
            raise ConflictError("User already exists")

        account = UserAccount(id=str(uuid.uuid4()), username=username)
        self.client._execute_write(
            "CREATE (u:User {id: $id, username: $username, password: $password})",
            {
                "id": account.id,
                "username": account.username,
                "password": self.hash_password(password),
            },
        )

        logger.info(f"Registered user: {account.username}")
        return account

    def authenticate(self, username: str, password: str) -> Optional[UserAccount]:
        """
        Check credentials.

        Returns:
            The account if the password matches, None otherwise
        """
        if not username or not password:
            return None

        stored = self.get_by_username(username.strip())
        if not stored:
            bcrypt.checkpw(password.encode(), self._DUMMY_HASH)
            return None

        if not self.check_password(password, stored.get("password") or ""):
            return None

        return UserAccount(id=str(stored["id"]), username=str(stored["username"]))
