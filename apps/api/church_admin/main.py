from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.staticfiles import StaticFiles

from church_admin.core.config import settings
from church_admin.core.logging import configure_logging
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
    settings as settings_router,
    uploads,
    users,
)
from church_admin.services.storage import UPLOAD_URL_PREFIX

configure_logging()

app = FastAPI(
    title="Church Admin API",
    version="1.0.0",
    description="API for members, families and houses, ministries, events, sacraments, gallery and notifications.",
    # Served behind a proxy prefix; the custom /docs route below points Swagger at the external openapi URL.
    docs_url=None,
    root_path=settings.root_path,
)


@app.get("/docs", include_in_schema=False)
def swagger_ui():
    prefix = (settings.root_path or "").rstrip("/")
    openapi_url = f"{prefix}{app.openapi_url}"
    return get_swagger_ui_html(openapi_url=openapi_url, title=f"{app.title} - Docs")


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
app.mount(UPLOAD_URL_PREFIX, StaticFiles(directory=settings.upload_dir), name="uploads")

app.include_router(health.router)
app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(members.router, prefix=settings.api_prefix)
app.include_router(families.router, prefix=settings.api_prefix)
app.include_router(houses.router, prefix=settings.api_prefix)
app.include_router(ministries.router, prefix=settings.api_prefix)
app.include_router(events.router, prefix=settings.api_prefix)
app.include_router(events.public_router, prefix=settings.api_prefix)
app.include_router(sacraments.router, prefix=settings.api_prefix)
app.include_router(gallery.router, prefix=settings.api_prefix)
app.include_router(settings_router.router, prefix=settings.api_prefix)
app.include_router(content.router, prefix=settings.api_prefix)
app.include_router(users.router, prefix=settings.api_prefix)
app.include_router(notifications.router, prefix=settings.api_prefix)
app.include_router(prayers.router, prefix=settings.api_prefix)
app.include_router(prayers.member_router, prefix=settings.api_prefix)
app.include_router(reports.router, prefix=settings.api_prefix)
app.include_router(uploads.router, prefix=settings.api_prefix)
