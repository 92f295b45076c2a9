"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fridgepro.api import ai, auth, fridge, ingredients, recipes, shopping_lists, users
from fridgepro.config import get_settings

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    yield


app = FastAPI(
    title="Fridge Pro API",
    description="Track what is in your fridge and find recipes you can cook with it",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(ingredients.router)
app.include_router(fridge.router)
app.include_router(recipes.router)
app.include_router(shopping_lists.router)
app.include_router(ai.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
