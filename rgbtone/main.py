import argparse
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import rgbtone.routers.router_colors as router_colors
import rgbtone.routers.router_convert as router_convert
import rgbtone.routers.router_site as router_site
from rgbtone.internal.app_context import AppContext
from rgbtone.internal.config import Config


CONFIG_ENV_VAR = "RGBTONE_CONFIG"
DEFAULT_CONFIG_PATH = "config.ini"

origins = [
    "http://localhost",
    "http://localhost:8080",
]


def create_app(context: AppContext | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "context", None) is None:
            config_path = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)
            app.state.context = AppContext(Config(config_path))
        yield

    server = FastAPI(title="RGBTONE", lifespan=lifespan)
    server.state.context = context

    server.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    server.include_router(router_convert.router)
    server.include_router(router_colors.router)
    server.include_router(router_site.router)
    return server


def main():
    parser = argparse.ArgumentParser(description="HEX/RGB color converter with saved colors")
    parser.add_argument("--host", type=str)
    parser.add_argument("--port", type=int)
    parser.add_argument("--config", type=str)
    parser.add_argument("--hotreload", action="store_true")
    args = parser.parse_args()

    default_host = "127.0.0.1"
    default_port = 8080

    if args.config:
        os.environ[CONFIG_ENV_VAR] = args.config

    uvicorn.run("rgbtone.main:create_app", factory=True, host=args.host or default_host, port=args.port or default_port, reload=args.hotreload)


if __name__ == "__main__":
    main()
