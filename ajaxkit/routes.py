"""
AJAX routes

POST {request_path}            process an AJAX call with the matching request handler
GET  {request_path}/bootstrap  javascript and CSS to embed in the initial page
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import HTMLResponse, JSONResponse, Response

from ajaxkit.context import AjaxContext
from ajaxkit.http import read_request

logger = logging.getLogger(__name__)

router = APIRouter()


def get_context(request: Request) -> AjaxContext:
    """Return the context attached to the application."""
    return request.app.state.ajax


@router.post("")
async def process_ajax_request(request: Request, context: AjaxContext = Depends(get_context)):
    ajax_request = await read_request(request)
    result = context.dispatch(ajax_request)
    if isinstance(result, Response):
        return result
    return JSONResponse(content=jsonable_encoder(result))


@router.get("/bootstrap", response_class=HTMLResponse)
async def bootstrap_script(request: Request, context: AjaxContext = Depends(get_context)):
    return HTMLResponse(context.get_script(include_js=True, include_css=True, request=request))
