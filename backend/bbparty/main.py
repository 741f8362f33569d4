import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bbparty.core.config import settings
from bbparty.core.errors import register_error_handlers
from bbparty.routers import bookings, groups, users, venues

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title=settings.PROJECT_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)

app.include_router(users.router)
app.include_router(venues.router)
app.include_router(groups.router)
app.include_router(bookings.router)


@app.get("/health")
def health():
    return {"status": "ok"}
