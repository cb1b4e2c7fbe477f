# api/routes/graphql.py
import logging
from typing import Any, Dict
from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_hardcover
from shelf.exceptions import HardcoverError
from shelf.hardcover import HardcoverClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["graphql"])


@router.post("/graphql")
def proxy_graphql(
    document: Dict[str, Any] = Body(...),
    hardcover: HardcoverClient = Depends(get_hardcover)
):
    """Forward a GraphQL document to Hardcover and return its JSON verbatim."""
    try:
        return JSONResponse(content=hardcover.proxy(document))
    except HardcoverError as e:
        logger.error("Error proxying GraphQL request: %s", e)
        return JSONResponse(status_code=500, content={"error": "Error processing request"})
