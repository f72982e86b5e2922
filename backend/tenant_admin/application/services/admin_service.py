"""Application service for internal admins.

Passwords are hashed with Argon2 and never returned to callers. Hashes in the
older ``<salt>:<hash>`` PBKDF2-HMAC-SHA512 format still verify.
"""

import hashlib
import hmac
import logging
import re
from typing import Any

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from tenant_admin.application import query_utils
from tenant_admin.application.schemas import AdminCreate, AdminLogin, AdminUpdate
from tenant_admin.application.validation import Err, validate
from tenant_admin.domain.entities import AuditStamp, to_iso
from tenant_admin.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    ProtectedEntityError,
    ValidationError,
)

from .resource_service import AccountActivationMixin, Record, ResourceDefinition, ResourceService

logger = logging.getLogger(__name__)

ROOT_ADMIN_ROLE = "INTERNAL_ROOT_ADMIN"

_PBKDF2_ITERATIONS = 10_000
_PBKDF2_KEY_LENGTH = 64

_password_hasher = PasswordHasher()

ADMIN = ResourceDefinition(
    name="Admin",
    slug="admins",
    collection="admins",
    id_prefix="IADMIN",
    create_schema=AdminCreate,
    update_schema=AdminUpdate,
    default_sort="accessDetails.email",
    search_fields=("accessDetails.email", "personId", "roles"),
    export_fields=(
        "id",
        "personId",
        "accessDetails.email",
        "roles",
        "account.isActive.value",
        "created.when",
        "updated.when",
    ),
    stats_fields=("account.isActive.value",),
    filter_fields={"email": "accessDetails.email", "personId": "personId", "role": "roles"},
    flag_filters={"isActive": "account.isActive.value"},
    active_path="account.isActive.value",
    stamp_active=False,
)


def is_root_admin(record: Record) -> bool:
    return ROOT_ADMIN_ROLE in (record.get("roles") or [])


def hash_password(password: str) -> str:
    """Hash a password using Argon2."""
    return _password_hasher.hash(password)


def _verify_legacy_password(password: str, stored: str) -> bool:
    salt, _, expected = stored.partition(":")
    if not salt or not expected:
        return False
    digest = hashlib.pbkdf2_hmac(
        "sha512", password.encode("utf-8"), salt.encode("utf-8"), _PBKDF2_ITERATIONS, _PBKDF2_KEY_LENGTH
    )
    return hmac.compare_digest(digest.hex(), expected)


def verify_password(password: str, stored: Any) -> bool:
    """Verify a password against an Argon2 hash or a legacy ``salt:hash`` value."""
    if not isinstance(stored, str) or not stored:
        return False
    if not stored.startswith("$argon2"):
        return _verify_legacy_password(password, stored)
    try:
        return _password_hasher.verify(stored, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


class AdminService(AccountActivationMixin, ResourceService):
    """Internal admins: unique email and person, policy-checked hashed passwords.

    The first admin ever created is given the root admin role.
    """

    definition = ADMIN

    def __init__(
        self,
        store,
        *,
        email_domain: str | None = None,
        password_pattern: str | None = None,
        **kwargs,
    ):
        super().__init__(store, **kwargs)
        self._email_domain = email_domain.lower().lstrip("@") if email_domain else None
        self._password_pattern = re.compile(password_pattern) if password_pattern else None

    # ── Rules ────────────────────────────────────────────────────────

    def _check_email_domain(self, email: str) -> None:
        if self._email_domain and not email.lower().endswith(f"@{self._email_domain}"):
            raise ValidationError([{
                "field": "accessDetails.email",
                "rule": "email_domain",
                "message": f"Email must belong to the {self._email_domain} domain",
            }])

    def _check_password_policy(self, password: str) -> None:
        if self._password_pattern and not self._password_pattern.search(password):
            raise ValidationError([{
                "field": "accessDetails.password",
                "rule": "password_policy",
                "message": "Password does not meet the organization password policy",
            }])

    async def _ensure_unique(self, field: str, value: Any) -> None:
        if await self._store.find_by(self._collection, field, value):
            raise DuplicateEntityError(self.definition.name, field, value)

    async def get_by_email(self, email: str) -> Record | None:
        matches = await self._store.find_by(self._collection, "accessDetails.email", email)
        return matches[0] if matches else None

    # ── Hooks ────────────────────────────────────────────────────────

    async def _before_create(self, fields: Record) -> Record:
        access = fields["accessDetails"]
        self._check_email_domain(access["email"])
        self._check_password_policy(access["password"])
        await self._ensure_unique("accessDetails.email", access["email"])
        await self._ensure_unique("personId", fields["personId"])

        access["password"] = hash_password(access["password"])
        access["lastLogin"] = []
        fields["account"] = {"isActive": {"value": True, "changes": []}}

        if not await self._store.list_all(self._collection):
            logger.info("First admin account; assigning %s", ROOT_ADMIN_ROLE)
            fields["roles"] = [ROOT_ADMIN_ROLE]
        return fields

    async def _require(self, record_id: str) -> Record:
        current = await self._store.get(self._collection, record_id)
        if current is None:
            raise EntityNotFoundError(self.definition.name, record_id)
        return current

    async def _before_update(self, record_id: str, fields: Record, actor: str) -> Record:
        current = await self._require(record_id)
        if is_root_admin(current) and actor != record_id:
            raise ProtectedEntityError(self.definition.name, record_id, "Root admin can only be modified by itself")

        access = fields.get("accessDetails")
        if access is not None and "password" in access:
            self._check_password_policy(access["password"])
            access["password"] = hash_password(access["password"])
        elif access is not None:
            del fields["accessDetails"]
        return fields

    async def _before_delete(self, record_id: str, actor: str) -> None:
        if is_root_admin(await self._require(record_id)):
            raise ProtectedEntityError(self.definition.name, record_id, "Root admin cannot be deleted")

    def _present(self, record: Record) -> Record:
        access = record.get("accessDetails")
        if not isinstance(access, dict) or "password" not in access:
            return record
        return {**record, "accessDetails": {k: v for k, v in access.items() if k != "password"}}

    # ── Authentication ───────────────────────────────────────────────

    async def verify_credentials(self, payload: Any) -> Record | None:
        """Check an email/password pair; returns the admin on success, else ``None``.

        Inactive accounts never verify. A successful check appends the login
        time to ``accessDetails.lastLogin``.
        """
        result = validate(AdminLogin, payload)
        if isinstance(result, Err):
            raise ValidationError(result.errors)
        login = result.value

        admin = await self.get_by_email(login.email)
        if admin is None or query_utils.get_path(admin, "account.isActive.value") is False:
            return None
        if not verify_password(login.password, query_utils.get_path(admin, "accessDetails.password")):
            return None

        moment = self._clock()
        logins = list(query_utils.get_path(admin, "accessDetails.lastLogin") or [])
        logins.append(to_iso(moment))
        await self._store.merge(
            self._collection,
            admin["id"],
            {"accessDetails": {"lastLogin": logins}, "updated": AuditStamp.now(admin["id"], moment).to_dict()},
        )
        logger.info("Admin %s signed in", admin["id"])
        return self._present(await self._store.get(self._collection, admin["id"]))
