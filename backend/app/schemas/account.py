"""Account Schemas — Pydantic models for registration, login and balance endpoints.

Invariants:
    - Usernames are stripped, 1-100 chars
    - TopUpRequest.amount must be a positive integer
"""

from pydantic import BaseModel, Field, field_validator


class AccountCredentials(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=200)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username cannot be empty or whitespace")
        return v


class AccountResponse(BaseModel):
    username: str
    balance: int


class BalanceResponse(BaseModel):
    balance: int


class TopUpRequest(BaseModel):
    amount: int = Field(gt=0)
