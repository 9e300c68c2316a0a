from church_admin.routers import (
    auth,
    content,
    events,
    families,
    gallery,
    health,
    houses,
    members,
    ministries,
    notifications,
    prayers,
    reports,
    sacraments,
    settings,
    uploads,
    users,
)

__all__ = [
    "health",
    "auth",
    "members",
    "families",
    "houses",
    "ministries",
    "events",
    "sacraments",
    "gallery",
    "settings",
    "content",
    "users",
    "notifications",
    "prayers",
    "reports",
    "uploads",
]
