"""Service health endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from src.database import health_check as db_health_check
from src.services.i18n_service import Translator, get_translator

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(translator: Translator = Depends(get_translator)) -> dict:
    """Report database reachability and the loaded message catalog.

    ``status`` is ``degraded`` while the database is unreachable; the
    endpoint itself always answers 200.
    """
    db_healthy = await db_health_check()
    return {
        "status": "healthy" if db_healthy else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "healthy" if db_healthy else "unavailable",
        "translations": {
            "source": translator.source,
            "languages": translator.get_supported_languages(),
            "defaultLanguage": translator.default_language,
        },
    }
