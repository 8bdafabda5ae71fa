"""Admin FastAPI application."""

from fastapi import FastAPI
from sqladmin import Admin

from cinebooker.admin.auth import AdminAuth
from cinebooker.admin.views import (
    BookingAdmin,
    MovieAdmin,
    ReviewAdmin,
    ScreenAdmin,
    ShowtimeAdmin,
    TheaterAdmin,
    ToolsView,
    UserAdmin,
)
from cinebooker.config import settings
from cinebooker.database import engine

ADMIN_VIEWS = [
    UserAdmin,
    MovieAdmin,
    TheaterAdmin,
    ScreenAdmin,
    ShowtimeAdmin,
    BookingAdmin,
    ReviewAdmin,
    ToolsView,
]


def create_admin_app() -> FastAPI:
    app = FastAPI(title="CineBooker Admin")
    auth = AdminAuth(secret_key=settings.admin_secret_key)
    admin = Admin(app, engine, authentication_backend=auth, title="CineBooker Admin")
    for view in ADMIN_VIEWS:
        admin.add_view(view)
    return app


admin_app = create_admin_app()
