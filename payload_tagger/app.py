# © 2025 Tejas Gajjar. All rights reserved.
# Owner: Tejas Gajjar — Agentic Middleware for Enterprise Integration
# Contact: tejas.gajjar@macys.com | tejgajjar2001@gmail.com
# Note: This module is tailored for OCI/GCP/AWS + TIBCO BW/JMS environments.

from fastapi import FastAPI, HTTPException, Request, Response
from pydantic import BaseModel
from typing import Any, Dict, Literal, Optional
import time

from .tagging.constants import PAYLOAD_TAG_REQUEST_PREFIX
from .tagging.logger import log_json, set_level
from .tagging.mask import GlobMask, MaskSyntaxError
from .tagging.tagger import get_body_request_tags, get_body_response_tags, tags_from_object
from .infra.config import PayloadTaggingSettings, load_settings
from .infra.tracing import get_tracer, init_tracing, set_payload_tags

class PreviewIn(BaseModel):
    body: str
    content_type: Optional[str] = "application/json"
    direction: Literal["request", "response"] = "request"
    filter: Optional[str] = None

def _media_type(header: Optional[str]) -> Optional[str]:
    # The JSON gate only looks at the suffix, so parameters must go
    if not header:
        return None
    return header.split(";", 1)[0].strip()

def _query_object(request: Request) -> Dict[str, Any]:
    params = request.query_params
    obj = {}
    for key in params.keys():
        values = params.getlist(key)
        obj[key] = values if len(values) > 1 else values[0]
    return obj

def create_app(settings: Optional[PayloadTaggingSettings] = None, tracer=None) -> FastAPI:
    settings = settings or load_settings()
    set_level(settings.log_level)
    if tracer is None:
        init_tracing(service_name="payload-tagger", max_attributes=settings.max_tags)
        tracer = get_tracer("payload_tagger.http")
    request_mask = settings.request_mask()
    response_mask = settings.response_mask()

    app = FastAPI(title="Payload Tagger")

    def _tag(span, direction: str, compute):
        try:
            set_payload_tags(span, compute())
        except Exception as e:
            log_json(level="error", msg="payload_tagging_failed", direction=direction, error=str(e))

    @app.middleware("http")
    async def tag_payloads(request: Request, call_next):
        with tracer.start_as_current_span(f"{request.method} {request.url.path}") as span:
            span.set_attribute("http.method", request.method)
            span.set_attribute("http.target", request.url.path)

            if request_mask is not None:
                body = await request.body()
                content_type = _media_type(request.headers.get("content-type"))
                if request.query_params:
                    _tag(span, "query", lambda: tags_from_object(
                        _query_object(request), request_mask, settings.max_depth,
                        PAYLOAD_TAG_REQUEST_PREFIX + ".query", settings.max_tags))
                _tag(span, "request", lambda: get_body_request_tags(
                    body.decode("utf-8", errors="replace"), content_type, request_mask,
                    settings.max_depth, settings.max_tags))

            response = await call_next(request)
            span.set_attribute("http.status_code", response.status_code)
            if response_mask is None:
                return response

            resp_body = b"".join([chunk async for chunk in response.body_iterator])
            content_type = _media_type(response.headers.get("content-type"))
            _tag(span, "response", lambda: get_body_response_tags(
                resp_body.decode("utf-8", errors="replace"), content_type, response_mask,
                settings.max_depth, settings.max_tags))
            rebuilt = Response(content=resp_body, status_code=response.status_code)
            # Raw list keeps repeated headers such as Set-Cookie
            rebuilt.raw_headers = response.raw_headers
            return rebuilt

    @app.get("/health")
    def health():
        return {"status": "ok", "time": int(time.time())}

    @app.post("/preview")
    def preview(payload: PreviewIn):
        if payload.filter is not None:
            try:
                mask = GlobMask(payload.filter)
            except MaskSyntaxError as e:
                raise HTTPException(status_code=400, detail=str(e))
        else:
            mask = request_mask if payload.direction == "request" else response_mask
            if mask is None:
                raise HTTPException(status_code=400, detail=f"{payload.direction} payload tagging is disabled")
        get_tags = get_body_request_tags if payload.direction == "request" else get_body_response_tags
        tags = get_tags(payload.body, _media_type(payload.content_type), mask, settings.max_depth, settings.max_tags)
        return {"tags": tags}

    log_json(level="info", msg="app_created", request_tagging=request_mask is not None,
             response_tagging=response_mask is not None)
    return app
