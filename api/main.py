"""FastAPI application entry point."""
from fastapi import FastAPI

from api.routes import router

app = FastAPI(title="SunFlight API", version="0.1.0")
app.include_router(router)
