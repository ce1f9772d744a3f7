from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, Request

from .services import SnowflakeApp
from .services.settings import Settings, load_settings


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    gateway = SnowflakeApp(settings or load_settings())
    app = FastAPI(title="snowflake-gateway")
    app.state.gateway = gateway

    @app.on_event("startup")
    async def startup_tasks() -> None:
        await gateway.startup_tasks()

    @app.on_event("shutdown")
    async def shutdown_tasks() -> None:
        await gateway.shutdown_tasks()

    @app.post("/snowflakes")
    async def generate(request: Request, payload: Optional[Dict[str, Any]] = Body(default=None)):
        return await gateway.generate(payload, request)

    @app.post("/snowflakes/encode")
    async def encode(payload: Dict[str, Any]):
        return await gateway.encode(payload)

    @app.post("/snowflakes/decode")
    async def decode(payload: Dict[str, Any]):
        return await gateway.decode(payload)

    @app.get("/snowflakes/{snowflake}")
    async def deconstruct(snowflake: str):
        return await gateway.deconstruct(snowflake)

    @app.get("/metrics")
    async def metrics_endpoint():
        return await gateway.metrics_endpoint()

    @app.get("/health")
    async def health():
        return await gateway.health()

    @app.get("/ready")
    async def ready():
        return await gateway.ready()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("snowflake_gateway.app.main:app", host="0.0.0.0", port=8180)
