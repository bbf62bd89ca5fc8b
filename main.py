"""
Main entrypoint: wallet history API server.

Env: SOLANA_NETWORK, SOLANA_RPC_URL or HELIUS_API_KEY, HISTORY_FETCH_CONCURRENCY,
SOLWALLET_USE_SYNTHETIC_DATA, API_HOST, API_PORT, LOG_LEVEL, LOG_FORMAT.

Equivalent: uvicorn backend_solwallet.api_server.app:app --host 0.0.0.0 --port 8000
"""

import os

# Configure structured JSON logging before other imports that may log
from backend_solwallet.wallet_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Run the FastAPI server in the main thread."""
    from backend_solwallet.config import get_settings
    from backend_solwallet.config.env import mask_rpc_url

    settings = get_settings()
    logger.info(
        "main_server_starting",
        host=settings.api_host,
        port=settings.api_port,
        network=settings.solana_network,
        rpc_url=mask_rpc_url(settings.solana_rpc_url),
        synthetic=settings.use_synthetic_data,
    )

    from backend_solwallet.api_server.app import app
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=os.getenv("LOG_LEVEL", "info").lower())


if __name__ == "__main__":
    main()
