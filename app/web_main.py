from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import ORJSONResponse

from adapters.layout.track_packing import TrackPackingEngine
from app.config import AppSettings, load_settings
from domain.errors import CircuitInputError
from domain.models import CircuitDocument, CircuitLayout
from domain.services.circuit_templates import CircuitTemplates
from domain.services.convert_document_to_layout import CircuitDocumentConverter

logger = logging.getLogger(__name__)


def create_app(settings: AppSettings) -> FastAPI:
    app = FastAPI(title=settings.layout.title)
    engine = TrackPackingEngine(settings.layout.to_layout_config())
    converter = CircuitDocumentConverter(engine)
    templates = CircuitTemplates(engine)

    def layout_response(layout: CircuitLayout, title: str | None = None) -> ORJSONResponse:
        payload = layout.to_dict()
        payload["title"] = title or settings.layout.title
        return ORJSONResponse(payload)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/layout", response_class=ORJSONResponse)
    def api_layout(document: CircuitDocument) -> ORJSONResponse:
        try:
            layout = converter.convert(document)
        except CircuitInputError as exc:
            logger.info("Rejected circuit document: %s", exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return layout_response(layout, document.title)

    @app.get("/api/templates/graph-state", response_class=ORJSONResponse)
    def api_graph_state(
        edges: str = Query(..., description="Comma separated edges such as 0-1,1-2."),
        wires: int | None = Query(default=None, ge=1),
    ) -> ORJSONResponse:
        try:
            parsed = parse_edges(edges)
            layout = templates.graph_state(parsed, wires)
        except CircuitInputError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return layout_response(layout)

    @app.get("/api/templates/fourier", response_class=ORJSONResponse)
    def api_fourier(
        wires: int = Query(..., ge=1),
        swaps: bool = Query(default=True),
    ) -> ORJSONResponse:
        return layout_response(templates.fourier_transform(wires, with_swaps=swaps))

    return app


def parse_edges(raw: str) -> list[tuple[int, int]]:
    edges: list[tuple[int, int]] = []
    for token in (part.strip() for part in raw.split(",")):
        if not token:
            continue
        left, sep, right = token.partition("-")
        if not sep or not left.strip().isdigit() or not right.strip().isdigit():
            msg = f"Edge must look like '0-1', got {token!r}"
            raise CircuitInputError(msg)
        edges.append((int(left), int(right)))
    return edges


app = create_app(load_settings())
