"""Session management: signed session ids and an in-memory table store."""

from datetime import datetime, timedelta
from uuid import uuid4

from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from config import config
from engine.game import RoundEngine, Session
from engine.rules import TableRules


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._secret_key = secret_key or config.security.secret_key
        self._serializer = URLSafeTimedSerializer(self._secret_key)

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify and extract session_id from a signed token.

        Args:
            token: The signed token to verify
            max_age: Maximum age in seconds (defaults to session_ttl)

        Returns:
            The session ID if valid, None otherwise
        """
        max_age = max_age or config.session_ttl
        try:
            return self._serializer.loads(token, max_age=max_age)
        except (BadSignature, SignatureExpired):
            return None


# Global signer instance
_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


class TableStore:
    """
    In-memory store of running tables, keyed by raw session id.

    Tables live only as long as the process; idle ones expire after the
    session TTL.
    """

    def __init__(self, ttl: int | None = None) -> None:
        self._ttl = ttl or config.session_ttl
        self._tables: dict[str, tuple[RoundEngine, datetime]] = {}

    def _expiry(self) -> datetime:
        return datetime.now() + timedelta(seconds=self._ttl)

    async def get(self, session_id: str) -> RoundEngine | None:
        """Get a table and refresh its expiry."""
        if session_id not in self._tables:
            return None

        table, expiry = self._tables[session_id]
        if expiry < datetime.now():
            await self.delete(session_id)
            return None

        self._tables[session_id] = (table, self._expiry())
        return table

    async def set(self, session_id: str, table: RoundEngine) -> None:
        self._tables[session_id] = (table, self._expiry())

    async def delete(self, session_id: str) -> None:
        self._tables.pop(session_id, None)

    async def exists(self, session_id: str) -> bool:
        return await self.get(session_id) is not None

    async def cleanup_expired(self) -> int:
        """Remove expired tables."""
        now = datetime.now()
        expired = [sid for sid, (_, expiry) in self._tables.items() if expiry < now]
        for sid in expired:
            del self._tables[sid]
        return len(expired)

    def __len__(self) -> int:
        return len(self._tables)


# Global table store instance
_table_store: TableStore | None = None


def get_table_store() -> TableStore:
    """Get or create the table store."""
    global _table_store
    if _table_store is None:
        _table_store = TableStore()
    return _table_store


def new_table() -> RoundEngine:
    """Create a table with the configured rules and a fresh session."""
    rules = TableRules.from_config(config.game)
    return RoundEngine(Session.create(rules=rules))


async def create_session(table: RoundEngine | None = None) -> str:
    """
    Register a table under a new session.

    Returns:
        The signed session token handed to the client
    """
    session_id = str(uuid4())
    await get_table_store().set(session_id, table or new_table())
    return get_session_signer().sign(session_id)


def extract_session_id(token: str) -> str | None:
    """
    Extract the raw session ID from a signed token.

    Returns:
        The raw session ID if valid, None otherwise
    """
    return get_session_signer().unsign(token)


async def get_table(token: str) -> RoundEngine | None:
    """Look up the table behind a signed session token."""
    session_id = extract_session_id(token)
    if session_id is None:
        return None
    return await get_table_store().get(session_id)


async def reset_table(token: str) -> RoundEngine | None:
    """Replace the table behind a token with a fresh one."""
    session_id = extract_session_id(token)
    if session_id is None:
        return None
    table = new_table()
    await get_table_store().set(session_id, table)
    return table
