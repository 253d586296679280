"""API routers, one module per resource."""

from wellness.routes import auth, content, goals, provider, reminders, users

ROUTERS = (
    auth.router,
    users.router,
    goals.router,
    reminders.router,
    provider.router,
    content.router,
)

__all__ = ["ROUTERS"]
