"""Request-scoped dependencies built from resources opened at startup."""

from fastapi import HTTPException, Request
from pymongo.database import Database

from adapter.mongodb.property_repository import MongoPropertyRepository
from adapter.mongodb.user_repository import MongoUserRepository
from port.mail_sender import MailSender
from port.object_store import ObjectStore
from port.property_repository import PropertyRepository
from port.user_repository import UserRepository


def _get_db(request: Request) -> Database:
    """Get the MongoDB database opened by the lifespan, raising 503 if absent."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return db


def get_user_repo(request: Request) -> UserRepository:
    return MongoUserRepository(_get_db(request))


def get_property_repo(request: Request) -> PropertyRepository:
    return MongoPropertyRepository(_get_db(request))


def get_mail_sender(request: Request) -> MailSender:
    return request.app.state.mail_sender


def get_object_store(request: Request) -> ObjectStore:
    return request.app.state.object_store
