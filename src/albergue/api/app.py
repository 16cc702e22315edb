"""
API HTTP de matching (aiohttp).

Endpoints:
- POST /api/shelter-matching          intake en el body
- GET  /api/shelter-matching/{email}  intake guardado
- GET  /health
"""

import asyncio

import structlog
from aiohttp import web

from albergue.errors import IntakeValidationError, StoreError
from albergue.service import ShelterMatchingService

logger = structlog.get_logger()

MATCH_FAILED_MESSAGE = "Failed to find matching shelters"


def _error(status: int, message: str) -> web.Response:
    return web.json_response({"success": False, "message": message}, status=status)


def _parse_limit(request: web.Request):
    raw = request.query.get("limit")
    if raw is None or raw == "":
        return None
    try:
        limit = int(raw.strip())
    except ValueError:
        return None
    return limit if limit > 0 else None


def create_app(service: ShelterMatchingService) -> web.Application:
    """Construye la aplicación aiohttp con el servicio inyectado."""
    app = web.Application()

    async def _respond(request: web.Request, run) -> web.Response:
        try:
            matches = await asyncio.to_thread(run)
        except IntakeValidationError as e:
            logger.info("Intake inválido", error=str(e))
            return _error(400, str(e))
        except StoreError as e:
            logger.error("Store no disponible", error=str(e))
            return _error(500, MATCH_FAILED_MESSAGE)
        except Exception as e:
            logger.error("Error inesperado en matching", error=str(e), exc_info=True)
            return _error(500, MATCH_FAILED_MESSAGE)

        if matches is None:
            return _error(404, "No intake form found for this user")
        return web.json_response(
            service.build_response(matches, limit=_parse_limit(request))
        )

    async def match_intake(request: web.Request) -> web.Response:
        try:
            payload = await request.json()
        except ValueError:
            return _error(400, "Request body must be valid JSON")
        return await _respond(request, lambda: service.find_matches(payload))

    async def match_stored_intake(request: web.Request) -> web.Response:
        email = request.match_info["email"]
        return await _respond(request, lambda: service.find_matches_for_email(email))

    async def health(_: web.Request) -> web.Response:
        return web.Response(text="ok")

    app.router.add_post("/api/shelter-matching", match_intake)
    app.router.add_get("/api/shelter-matching/{email}", match_stored_intake)
    app.router.add_get("/health", health)

    return app
