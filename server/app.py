"""FastAPI web server for the wishlist."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Cookie, Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field

from wishlist import __version__
from wishlist.config import settings
from wishlist.db.database import Database
from wishlist.db.errors import ConstraintViolation
from wishlist.db.item_repo import ItemRepository
from wishlist.db.reservation_repo import ReservationRepository
from wishlist.db.user_repo import UserRepository
from wishlist.models.item import ReservationState
from wishlist.models.user import User
from wishlist.services.events import EventBroker
from wishlist.services.session_cache import SessionCache

logger = logging.getLogger(__name__)

SESSION_COOKIE = "session_id"
LIST_CATEGORY = "list"


# Global service instances
_db: Optional[Database] = None
_cache: Optional[SessionCache] = None
_broker: Optional[EventBroker] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store and the in-memory services on startup."""
    global _db, _cache, _broker

    _db = Database(path=settings.DATABASE_PATH)
    _db.init()
    _cache = SessionCache(
        session_ttl=settings.SESSION_EXPIRE_SECONDS,
        token_ttl=settings.TOKEN_EXPIRE_SECONDS,
    )
    _broker = EventBroker(history_size=settings.EVENT_HISTORY_SIZE)

    logger.info(f"Server started - DB: {settings.DATABASE_PATH}")
    yield

    logger.info("Server shutting down")
    _db.close()
    _db = _cache = _broker = None


app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="Shared gift wishlist with private reservations",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(ConstraintViolation)
async def constraint_violation_handler(request: Request, exc: ConstraintViolation):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


# Request Models
class LoginRequest(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)


class AddRequest(BaseModel):
    name: str = Field(min_length=1)
    link: Optional[str] = None
    reserve: bool = False


class DeleteRequest(BaseModel):
    id: int


class ReserveRequest(BaseModel):
    id: int
    reserve: bool = True


# Dependencies
def get_database() -> Database:
    if _db is None:
        raise HTTPException(status_code=503, detail="Database not initialized")
    return _db


def get_session_cache() -> SessionCache:
    if _cache is None:
        raise HTTPException(status_code=503, detail="Session cache not initialized")
    return _cache


def get_broker() -> EventBroker:
    if _broker is None:
        raise HTTPException(status_code=503, detail="Event broker not initialized")
    return _broker


def _session_user(
    session_id: Optional[str], db: Database, cache: SessionCache
) -> Optional[User]:
    if not session_id:
        return None
    user_id = cache.lookup(session_id)
    if user_id is None:
        return None
    return UserRepository(db).get_by_id(user_id)


def current_user(
    request: Request,
    session_id: Optional[str] = Cookie(default=None),
    db: Database = Depends(get_database),
    cache: SessionCache = Depends(get_session_cache),
) -> User:
    """Resolve the session cookie to a user or reject the request."""
    user = _session_user(session_id, db, cache)
    if user is None:
        logger.warning(f"Rejected unauthenticated request to {request.url.path}")
        raise HTTPException(status_code=401, detail="Not logged in")
    return user


# API Routes
@app.get("/")
async def index(
    session_id: Optional[str] = Cookie(default=None),
    db: Database = Depends(get_database),
    cache: SessionCache = Depends(get_session_cache),
):
    """Redirect to the list view when logged in, else to the login page."""
    if _session_user(session_id, db, cache) is None:
        return RedirectResponse("/login.html", status_code=303)
    return RedirectResponse("/list.html", status_code=303)


@app.post("/api/v0/login")
async def login(
    payload: LoginRequest,
    request: Request,
    db: Database = Depends(get_database),
    cache: SessionCache = Depends(get_session_cache),
):
    """Register the user if needed and issue a confirmation link."""
    users = UserRepository(db)
    user = users.get_by_email(payload.email)
    if user is None:
        user_id = users.add(payload.name, payload.email)
        user = User(id=user_id, name=payload.name, email=payload.email)

    token = cache.add(user.id)
    link = request.url_for("confirm_token", token=token)
    # Mail delivery is handled outside this service; the link goes to the log.
    logger.info(f"Confirmation link for {user.email}: {link}")
    return {"status": "sent", "email": user.email}


@app.get("/api/v0/token/{token}", name="confirm_token")
async def confirm_token(
    token: str,
    db: Database = Depends(get_database),
    cache: SessionCache = Depends(get_session_cache),
):
    """Confirm a login token and turn it into the session cookie."""
    try:
        user_id = cache.confirm(token)
    except KeyError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    max_age = settings.SESSION_EXPIRE_SECONDS
    response = RedirectResponse("/list.html", status_code=303)
    response.set_cookie(SESSION_COOKIE, token, max_age=max_age, path="/", httponly=True)

    user = UserRepository(db).get_by_id(user_id)
    if user is not None:
        response.set_cookie("user_name", user.name, max_age=max_age, path="/")
        response.set_cookie("user_email", user.email, max_age=max_age, path="/")
        logger.info(f"Cookies set for {user.name} ({user.email})")
    return response


@app.get("/api/v0/logout")
async def logout(
    session_id: Optional[str] = Cookie(default=None),
    user: User = Depends(current_user),
    cache: SessionCache = Depends(get_session_cache),
):
    cache.forget(session_id)
    response = RedirectResponse("/login.html", status_code=303)
    for name in (SESSION_COOKIE, "user_name", "user_email"):
        response.delete_cookie(name, path="/")
    logger.info(f"Logged out {user.email}")
    return response


@app.get("/api/v0/list")
async def list_items(
    user: User = Depends(current_user),
    db: Database = Depends(get_database),
):
    """All items as seen by the logged-in user."""
    items = ItemRepository(db).list(user.id)
    return {"items": [i.to_dict() for i in items]}


@app.post("/api/v0/add")
async def add_item(
    payload: AddRequest,
    user: User = Depends(current_user),
    db: Database = Depends(get_database),
    broker: EventBroker = Depends(get_broker),
):
    reserved_by = user.id if payload.reserve else None
    item_id = ItemRepository(db).add(payload.name, payload.link, user.id, reserved_by)
    broker.publish(LIST_CATEGORY, {"action": "add", "id": item_id})
    return {"id": item_id}


@app.post("/api/v0/delete")
async def delete_item(
    payload: DeleteRequest,
    user: User = Depends(current_user),
    db: Database = Depends(get_database),
    broker: EventBroker = Depends(get_broker),
):
    """Delete one of the user's own items; other items are left untouched."""
    deleted = ItemRepository(db).delete(user.id, payload.id) > 0
    if deleted:
        broker.publish(LIST_CATEGORY, {"action": "delete", "id": payload.id})
    return {"deleted": deleted}


@app.post("/api/v0/reserve")
async def reserve_item(
    payload: ReserveRequest,
    user: User = Depends(current_user),
    db: Database = Depends(get_database),
    broker: EventBroker = Depends(get_broker),
):
    """Reserve a free item, or release a reservation the user holds."""
    reservations = ReservationRepository(db)

    if payload.reserve:
        if not reservations.reserve_if_free(user.id, payload.id):
            state, owner = reservations.reservation_state(payload.id)
            if state is ReservationState.NOT_FOUND:
                raise HTTPException(status_code=404, detail="No such item")
            if owner != user.id:
                raise HTTPException(status_code=409, detail="Item is already reserved")
            return {"id": payload.id, "reserved": True}
    else:
        state, owner = reservations.reservation_state(payload.id)
        if state is ReservationState.NOT_FOUND:
            raise HTTPException(status_code=404, detail="No such item")
        if state is ReservationState.UNRESERVED:
            return {"id": payload.id, "reserved": False}
        if owner != user.id:
            raise HTTPException(status_code=403, detail="Reserved by someone else")
        reservations.unreserve(payload.id)

    action = "reserve" if payload.reserve else "unreserve"
    broker.publish(LIST_CATEGORY, {"action": action, "id": payload.id})
    return {"id": payload.id, "reserved": payload.reserve}


@app.get("/api/v0/events")
async def poll_events(
    category: str = LIST_CATEGORY,
    since_time: Optional[int] = None,
    timeout: Optional[int] = Query(default=None, ge=0),
    user: User = Depends(current_user),
    broker: EventBroker = Depends(get_broker),
):
    """Long-poll for events newer than ``since_time`` (milliseconds).

    Without ``since_time`` only events published after the request count.
    """
    if since_time is None:
        since_time = broker.now_ms()
    limit = settings.EVENTS_TIMEOUT_SECONDS
    wait_for = limit if timeout is None else min(timeout, limit)
    events = await broker.wait(category, since_time, wait_for)
    return {"events": [e.to_dict() for e in events]}


if settings.STATIC_DIR.exists():
    app.mount("/", StaticFiles(directory=str(settings.STATIC_DIR), html=True), name="static")
