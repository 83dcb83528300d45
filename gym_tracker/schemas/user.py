"""Pydantic schemas for users; hashes and salts never appear here."""
from pydantic import BaseModel


class UserOutSchema(BaseModel):
    id: str
    name: str

    class Config:
        from_attributes = True


class IdentitySchema(BaseModel):
    id: str
    name: str
