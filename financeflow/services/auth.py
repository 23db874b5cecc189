"""
Session Authentication

CRITICAL: This is NOT security. Any non-empty email logs in. Signup
appends the submitted details to a `users` log that login never reads.
It exists to give the app a notion of "who is using it".

Store keys:
- currentUser: email of the logged-in user; presence means a session
- users: JSON array of {email, name, password}, written only
"""

from typing import Optional

from pydantic import TypeAdapter, ValidationError

from financeflow.audit import AuditLogger
from financeflow.models.expense import UserRecord
from financeflow.services.storage import CorruptDataError, KeyValueStore


CURRENT_USER_KEY = "currentUser"
USERS_KEY = "users"

_USER_LIST = TypeAdapter(list[UserRecord])


class AuthService:
    """Trust-any-email login backed by the key-value store."""
    
    def __init__(
        self,
        store: KeyValueStore,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger
    
    def current_user(self) -> Optional[str]:
        """Email of the logged-in user, or None."""
        return self._store.get(CURRENT_USER_KEY)
    
    @property
    def is_authenticated(self) -> bool:
        return self.current_user() is not None
    
    def login(self, email: Optional[str]) -> bool:
        """
        Start a session for `email`.
        
        Returns False, without touching the store, if the email is blank.
        """
        email = (email or "").strip()
        if not email:
            return False
        
        self._store.set(CURRENT_USER_KEY, email)
        if self._audit_logger:
            self._audit_logger.log_user_logged_in(email)
        return True
    
    def signup(
        self,
        email: Optional[str],
        name: str = "",
        password: str = "",
    ) -> bool:
        """
        Append the user to the signup log and log them in.
        
        Raises:
            CorruptDataError: If the stored users log cannot be parsed
        """
        email = (email or "").strip()
        if not email:
            return False
        
        users = self._read_users()
        users.append(UserRecord(email=email, name=name.strip(), password=password))
        self._store.set(USERS_KEY, _USER_LIST.dump_json(users).decode("utf-8"))
        
        if self._audit_logger:
            self._audit_logger.log_user_signed_up(email)
        return self.login(email)
    
    def logout(self) -> None:
        email = self.current_user()
        self._store.remove(CURRENT_USER_KEY)
        if self._audit_logger:
            self._audit_logger.log_user_logged_out(email)
    
    def _read_users(self) -> list[UserRecord]:
        raw = self._store.get(USERS_KEY)
        if raw is None:
            return []
        try:
            return _USER_LIST.validate_json(raw)
        except ValidationError as e:
            if self._audit_logger:
                self._audit_logger.log_corrupt_data(USERS_KEY, str(e))
            raise CorruptDataError(USERS_KEY, str(e)) from e
