import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx
import uvicorn
from fastapi import FastAPI

from messages_relay import __version__
from messages_relay.api.endpoints import router as api_router
from messages_relay.api.orchestrator.request_orchestrator import RelayOrchestrator
from messages_relay.core.config import ConfigError, RelayConfig
from messages_relay.core.logging import configure_root_logging
from messages_relay.core.upstream_client import UpstreamClient


def create_app(
    config: Optional[RelayConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Application factory.

    Args:
        config: Relay settings. When omitted (the reload worker path) they are
            loaded from the environment and root logging is configured here.
        transport: Optional httpx transport for the backend client.
    """
    if config is None:
        config = RelayConfig.load()
        configure_root_logging(config.log_level)

    upstream = UpstreamClient(
        config.target_api_url,
        connect_timeout=config.connect_timeout,
        transport=transport,
    )

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        await upstream.aclose()

    # No docs routes: every path except /v1/messages is a 404
    app = FastAPI(
        title="Messages Relay",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.config = config
    app.state.orchestrator = RelayOrchestrator(config, upstream)
    app.include_router(api_router)
    return app


def print_startup_summary(config: RelayConfig) -> None:
    print(f"🚀 Messages Relay v{__version__}")
    print(f"   Server: http://{config.host}:{config.port}")
    print(f"📡 Proxying Anthropic API requests to: {config.target_api_url}")
    print("📋 Endpoint: POST /v1/messages")
    print(f"🔧 Log level: {config.log_level}")
    print(f"🔑 Default API key: {config.api_key_hint}")
    print(f"   Force default API key: {'Enabled' if config.force_default_api_key else 'Disabled'}")
    print(f"   Session metadata: {'Enabled' if config.metadata_injection_enabled else 'Disabled'}")
    print("")


def run_server(
    config: RelayConfig,
    host: Optional[str] = None,
    port: Optional[int] = None,
    reload: bool = False,
) -> None:
    configure_root_logging(config.log_level)

    # Reload needs an import string, so the worker rebuilds the app itself
    app = "messages_relay.main:create_app" if reload else create_app(config)

    # log_config=None and log_level=None keep uvicorn from replacing our setup
    uvicorn.run(
        app,
        factory=reload,
        host=host or config.host,
        port=port or config.port,
        log_config=None,
        log_level=None,
        access_log=config.log_level == "debug",
        reload=reload,
    )


def main() -> None:
    if len(sys.argv) > 1 and sys.argv[1] == "--help":
        print(f"Messages Relay v{__version__}")
        print("")
        print("Usage: python -m messages_relay.main")
        print("       or: messages-relay start")
        print("")
        print("Optional environment variables:")
        print("  HOST - Server host (default: 0.0.0.0)")
        print("  PORT - Server port (default: 3000)")
        print("  TARGET_API_URL - Backend messages endpoint")
        print("  LOG_LEVEL - Logging level (default: info)")
        print("  DEFAULT_API_KEY - Key used when a request carries none")
        print("  FORCE_DEFAULT_API_KEY - Always use DEFAULT_API_KEY (default: false)")
        print("  DEFAULT_USER_ID - Inject metadata.user_id for this user when absent")
        print("  STREAMING_CONNECT_TIMEOUT_SECONDS - Backend connect timeout (default: 30)")
        sys.exit(0)

    try:
        config = RelayConfig.load()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    print_startup_summary(config)
    run_server(config)


if __name__ == "__main__":
    main()
