"""
Servidor HTTP de matching de albergues.

Uso:
    python -m albergue.scripts.run_api
    python -m albergue.scripts.run_api --port 9000
"""

import argparse
import asyncio
import sys

import structlog
from aiohttp import web

from albergue.api import create_app
from albergue.config import get_settings
from albergue.database import IntakeRepository, ShelterRepository
from albergue.logging_config import configure_logging
from albergue.matching import ShelterMatcher
from albergue.service import ShelterMatchingService

configure_logging()
logger = structlog.get_logger()


def build_service() -> ShelterMatchingService:
    """Arma el servicio con los repositorios de Supabase."""
    return ShelterMatchingService(
        shelters=ShelterRepository(),
        matcher=ShelterMatcher.from_settings(),
        intakes=IntakeRepository(),
    )


async def serve(host: str, port: int) -> None:
    app = create_app(build_service())

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host=host, port=port)

    try:
        await site.start()
        logger.info(
            "API activa",
            host=host,
            port=port,
            health_path="/health",
        )
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()


def main():
    """Entry point del servidor."""
    settings = get_settings()
    parser = argparse.ArgumentParser(description="API de matching de albergues")
    parser.add_argument("--host", default=settings.api_host, help="Interfaz de escucha")
    parser.add_argument("--port", type=int, default=settings.api_port, help="Puerto")
    args = parser.parse_args()

    logger.info("Iniciando API de matching...")

    try:
        asyncio.run(serve(args.host, args.port))
    except KeyboardInterrupt:
        logger.info("API detenida por usuario")
        sys.exit(0)
    except Exception as e:
        logger.error("Error fatal en API", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
