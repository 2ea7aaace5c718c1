import logging
from typing import Any, Dict, Optional

from fittrack.core.errors import (
    DuplicateAccount,
    InvalidCredentials,
    InvalidDomain,
    InvalidValue,
    MissingCredentials,
    UserNotFound,
    WeakPassword,
)
from fittrack.core.security import get_password_hash, verify_password
from fittrack.models.ids import next_record_id
from fittrack.models.user import PROFILE_NUMERIC_FIELDS, new_user, public_user
from fittrack.services.validation import (
    coerce_id,
    coerce_number,
    is_allowed_address,
    is_blank,
    is_negative,
    is_strong_password,
    normalize_username,
    require,
    utc_now_iso,
)
from fittrack.storage.json_store import Document, JsonDocumentStore

logger = logging.getLogger(__name__)


def _find_user(document: Document, user_id: Optional[int]) -> Optional[Dict[str, Any]]:
    if user_id is None:
        return None
    return next((u for u in document["users"] if u.get("id") == user_id), None)


class AccountService:
    @staticmethod
    def register(
        store: JsonDocumentStore,
        username: Optional[str],
        password: Optional[str],
        full_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create an account and return it without the password hash"""
        require("Missing username or password", username, password)

        normalized_user = normalize_username(username)
        clean_password = password.strip()

        if not is_allowed_address(normalized_user):
            raise InvalidDomain()
        if not is_strong_password(clean_password):
            raise WeakPassword()

        # Hash outside the store lock - bcrypt is the slowest step here
        hashed_password = get_password_hash(clean_password)

        with store.transaction() as document:
            if any(u.get("username") == normalized_user for u in document["users"]):
                raise DuplicateAccount()

            user = new_user(
                user_id=next_record_id(document["users"]),
                username=normalized_user,
                hashed_password=hashed_password,
                full_name=full_name.strip() if full_name else "",
                joined=utc_now_iso(),
            )
            document["users"].append(user)

        logger.info(f"Registered user {user['id']} ({normalized_user})")
        return public_user(user)

    @staticmethod
    def authenticate(
        store: JsonDocumentStore,
        username: Optional[str],
        password: Optional[str],
    ) -> Dict[str, Any]:
        """Verify credentials and return the user without the password hash"""
        if is_blank(username) or is_blank(password):
            raise MissingCredentials()

        normalized_user = normalize_username(username)
        document = store.snapshot()
        user = next((u for u in document["users"] if u.get("username") == normalized_user), None)

        # Same error for unknown user and wrong password - no account enumeration
        if user is None or not verify_password(password.strip(), user["password"]):
            logger.info(f"Failed login for {normalized_user}")
            raise InvalidCredentials()

        return public_user(user)

    @staticmethod
    def update_profile(
        store: JsonDocumentStore,
        user_id: Any,
        fields: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Shallow-merge fields into the user's profile.

        A missing or non-numeric userId matches no user, so it is reported
        as UserNotFound like any other unknown id.
        """
        updates = dict(fields)
        updates.pop("userId", None)

        with store.transaction() as document:
            user = _find_user(document, coerce_id(user_id))
            if user is None:
                raise UserNotFound()

            for name in PROFILE_NUMERIC_FIELDS:
                if name in updates:
                    if is_negative(updates[name]):
                        raise InvalidValue(f"{name} cannot be negative")
                    updates[name] = coerce_number(updates[name])
            user["profile"] = {**user.get("profile", {}), **updates}

        return public_user(user)


account_service = AccountService()
