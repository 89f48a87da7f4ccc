import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from homebite.api.errors import register_exception_handlers
from homebite.api.health import router as health_router
from homebite.api.routes_cart import router as cart_router
from homebite.api.routes_catalogue import cooks_router, menu_router
from homebite.api.routes_order import router as order_router
from homebite.api.routes_reviews import router as reviews_router
from homebite.api.routes_users import router as users_router
from homebite.config import settings
from homebite.db import init_db


def configure_logging():
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    configure_logging()
    init_db()
    yield


app = FastAPI(title="HomeBite - Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(users_router, tags=["users"])

app.include_router(cooks_router, tags=["catalogue"])

app.include_router(menu_router, tags=["catalogue"])

app.include_router(cart_router, tags=["cart"])

app.include_router(order_router, prefix="/api/orders", tags=["orders"])

app.include_router(reviews_router, tags=["reviews"])


def run():
    import uvicorn

    uvicorn.run("homebite.main:app", host=settings.APP_HOST, port=settings.APP_PORT)


if __name__ == "__main__":
    run()
