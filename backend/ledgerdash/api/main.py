from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ledgerdash.settings import configure_logging

from ledgerdash.api.exception_handlers import register_exception_handlers
from ledgerdash.api.routes.health import router as health_router
from ledgerdash.api.routes.dashboard import router as dashboard_router
from ledgerdash.api.routes.exports import router as exports_router


app = FastAPI(title="ledgerdash API", version="0.1.0")
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

@app.on_event("startup")
def _startup_logging() -> None:
    configure_logging()

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(dashboard_router)
app.include_router(exports_router)
