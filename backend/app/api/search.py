# backend/app/api/search.py

import logging
import sqlite3

from fastapi import APIRouter, Depends, Request

from app.api.deps import require_token
from app.core.search import SearchQueryError, search_offence, split_values
from app.db import get_db
from app.errors import ApiError
from app.schemas import SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])


@router.get(
    "/search",
    response_model=SearchResponse,
    dependencies=[Depends(require_token)],
)
def search(request: Request, conn: sqlite3.Connection = Depends(get_db)):
    """
    Total of one offence per LGA.

    `offence` is the human-readable label (see /offences). Every other
    parameter filters on the offences column of that name and may repeat
    or hold comma-separated values, e.g. ?offence=Arson&year=2019,2020.
    """
    params = request.query_params
    offence = params.get("offence")
    if not offence:
        raise ApiError(400, "missing offence query")

    filters = {
        name: split_values(params.getlist(name))
        for name in params.keys()
        if name != "offence"
    }

    try:
        result = search_offence(conn, offence, filters)
    except (SearchQueryError, sqlite3.Error) as e:
        logger.info("Invalid search %s: %s", dict(params), e)
        raise ApiError(400, "invalid query") from e

    query = {"offence": offence}
    for name, values in filters.items():
        query[name] = values[0] if len(values) == 1 else values

    return {"query": query, "result": result}
