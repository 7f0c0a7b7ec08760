import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .api.errors import install_error_handlers
from .api.routes import auth, users, pool, conference, hotel, restaurant, misc
from .db.session import Base, engine, SessionLocal
from .config import get_settings
from .services.admin import ensure_admin_exists

settings = get_settings()
logging.basicConfig(level=settings.log_level.upper())

app = FastAPI(title="Resort Desk API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

app.include_router(auth.router, prefix="/api/v1")
app.include_router(users.router, prefix="/api/v1")
app.include_router(pool.router, prefix="/api/v1")
app.include_router(conference.router, prefix="/api/v1")
app.include_router(hotel.router, prefix="/api/v1")
app.include_router(restaurant.router, prefix="/api/v1")
app.include_router(misc.router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event() -> None:
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        ensure_admin_exists(
            session,
            settings.default_admin_username,
            settings.default_admin_password,
            settings.default_admin_email,
        )
