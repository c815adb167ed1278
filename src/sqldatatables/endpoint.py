"""
FastAPI glue: read the DataTables parameters off a request and answer it
"""
import logging
from typing import Any, Dict

from fastapi import Request, status
from fastapi.responses import JSONResponse

from .core import DataTables
from .exceptions import DataTablesError
from .schema import DataTablesRequest, DataTablesResponse

logger = logging.getLogger(__name__)


async def read_form(request: Request) -> Dict[str, Any]:
    """Query string and form body values, the body winning on conflicts."""
    values: Dict[str, Any] = dict(request.query_params)
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(
        ("application/x-www-form-urlencoded", "multipart/form-data")
    ):
        form = await request.form()
        values.update(
            {key: value for key, value in form.items() if isinstance(value, str)}
        )
    return values


async def datatables_request(request: Request) -> DataTablesRequest:
    """FastAPI dependency parsing the DataTables parameters of the request."""
    return DataTablesRequest.from_form(await read_form(request))


async def respond(datatable: DataTables, request_data: DataTablesRequest):
    """
    Process the request, turning a failed request into a 500 the widget can
    still render (it shows the error text instead of hanging).
    """
    try:
        return await datatable.process(request_data)
    except DataTablesError as e:
        logger.error(f"DataTables request failed: {e}")
        payload = DataTablesResponse(
            draw=request_data.draw,
            recordsTotal=0,
            recordsFiltered=0,
            data=0,
            error=str(e),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=payload.model_dump(),
        )
