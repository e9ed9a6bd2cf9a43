from __future__ import annotations

from fastapi import FastAPI

from app.deps import get_app_state


def create_app() -> FastAPI:
    app = FastAPI(title="Life Navigator API", version="0.1.0")

    @app.get("/healthz")
    def healthz() -> dict:
        return {"status": "ok"}

    @app.get("/api/health")
    def health() -> dict:
        state = get_app_state()
        return {
            "status": "healthy",
            "server": state.settings.get("service", {}).get("name", "Life Navigator Personal Data API"),
            "endpoints": sorted(
                route.path for route in app.routes if getattr(route, "path", "").startswith(("/api", "/auth"))
            ),
            "offline": state.offline,
            "cache": {
                "backend": state.cache.backend,
                "size": state.cache.size(),
                "ttl": f"{state.responses.ttl_seconds} seconds",
            },
        }

    from app.routes import admin, auth, sources, wellbeing  # noqa: WPS433

    app.include_router(wellbeing.router)
    app.include_router(sources.router)
    app.include_router(auth.router)
    app.include_router(admin.router)
    return app


app = create_app()
