"""Account Service — registration, login, balance reads and top-ups.

Invariants:
    - Usernames are unique; a duplicate registration is a ValidationError
    - New accounts start with settings.starting_balance
    - Passwords are stored as salted PBKDF2 hashes, compared in constant time
    - Top-up amount must be a positive integer

Design Decisions:
    - Identity is asserted by the caller (X-Username); this service only guards
      registration and login, it does not issue sessions
"""

import hashlib
import hmac
import logging
import secrets

from app.core.errors import ErrorContext, NotFoundError, ValidationError
from app.core.repository_protocols import AccountLedger
from app.core.ticket_records import coerce_int

logger = logging.getLogger(__name__)

_HASH_ITERATIONS = 100_000


def hash_password(password: str, salt: str | None = None) -> str:
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), salt.encode(), _HASH_ITERATIONS,
    )
    return f"{salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    salt, _, _digest = stored.partition("$")
    return hmac.compare_digest(hash_password(password, salt), stored)


class AccountService:
    """Account lifecycle operations on top of the ledger."""

    def __init__(self, ledger: AccountLedger, starting_balance: int = 1000):
        self.ledger = ledger
        self.starting_balance = starting_balance

    async def register(self, username: str, password: str) -> dict:
        if not username or not password:
            raise ValidationError("Missing fields")
        if await self.ledger.find_account(username) is not None:
            raise ValidationError("Username exists", "username")
        account = await self.ledger.create_account(
            username, hash_password(password), self.starting_balance,
        )
        logger.info("Account registered", extra={"username": username})
        return {"username": account["username"], "balance": account["balance"]}

    async def login(self, username: str, password: str) -> dict:
        account = await self.ledger.find_account(username)
        if account is None or not verify_password(password, account["password_hash"]):
            raise ValidationError("Invalid credentials")
        return {"username": username, "balance": account["balance"]}

    async def balance(self, username: str) -> int:
        account = await self.ledger.find_account(username)
        return account["balance"] if account else 0

    async def top_up(self, username: str, amount: object) -> int:
        value = coerce_int(amount, "amount")
        if value <= 0:
            raise ValidationError("Invalid request", "amount")
        if await self.ledger.credit_balance(username, value) == 0:
            raise NotFoundError(
                "Account not found", ErrorContext(username=username, operation="top_up"),
            )
        logger.info("Balance topped up", extra={"username": username, "amount": value})
        return await self.balance(username)
