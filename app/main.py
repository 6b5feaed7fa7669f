from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.api.routes import characters
from app.api.errors import catalog_error_handler
from app.core.catalog_client import CatalogClient
from app.core.exceptions import CatalogError
from app.core.settings import configure_logging, load_settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = load_settings()
    configure_logging(settings.log_level)

    app.state.settings = settings
    app.state.catalog_client = CatalogClient.from_settings(settings)
    try:
        yield
    finally:
        await app.state.catalog_client.aclose()


app = FastAPI(
    title="SWAPI Gallery",
    lifespan=lifespan,
)

app.include_router(characters.router, tags=["characters"])
app.add_exception_handler(CatalogError, catalog_error_handler)


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="127.0.0.1", port=8000)
