from __future__ import annotations

import csv
import io
import json
from datetime import datetime, timezone
from typing import Iterator, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from loguru import logger
from sqlmodel import Session, delete, select

from seat_layout.config import load_grid_limits
from seat_layout.editor import (
    EditResult,
    change_naming,
    paint_cell,
    resize_grid,
    set_custom_label,
    toggle_row_walkway,
    toggle_rows_walkway,
)
from seat_layout.layout import LayoutConfig, LayoutError
from seat_layout.log import configure_logging
from seat_layout.payload import hydrate, save_payload, seat_rows, to_payload
from seat_layout.seat_types import registry_dict
from seat_layout.validation import analyze

from .db import get_session, init_db
from .models import Screen, Seat
from .schemas import (
    CustomLabelEdit,
    EditRequest,
    LayoutNew,
    NamingEdit,
    PaintEdit,
    ResizeEdit,
    ScreenCreate,
    ScreenUpdate,
    ToggleRowEdit,
    ToggleRowsEdit,
)


app = FastAPI(title="Screen Seat Layout API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

LIMITS = load_grid_limits()


@app.on_event("startup")
def _startup() -> None:
    configure_logging()
    init_db()


def _session() -> Iterator[Session]:
    # Closing rolls back anything a failed request left uncommitted.
    with get_session() as session:
        yield session


def _hydrate(data: dict) -> LayoutConfig:
    try:
        return hydrate(data, LIMITS)
    except LayoutError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


def _layout_response(config: LayoutConfig) -> dict:
    return {"layout": to_payload(config), "analysis": analyze(config).to_dict()}


def _apply_edit(config: LayoutConfig, edit) -> EditResult:
    if isinstance(edit, PaintEdit):
        return paint_cell(config, edit.row, edit.col, edit.seat_type, LIMITS)
    if isinstance(edit, CustomLabelEdit):
        return set_custom_label(config, edit.row, edit.col, edit.label, edit.policy)
    if isinstance(edit, ToggleRowEdit):
        return toggle_row_walkway(config, edit.row, LIMITS)
    if isinstance(edit, ToggleRowsEdit):
        return toggle_rows_walkway(config, edit.rows, LIMITS)
    if isinstance(edit, ResizeEdit):
        return resize_grid(config, edit.rows, edit.columns, LIMITS)
    if isinstance(edit, NamingEdit):
        return change_naming(config, edit.numbering_scheme, edit.row_naming, edit.custom_row_names, LIMITS)
    raise HTTPException(status_code=400, detail=f"unsupported edit: {type(edit).__name__}")


def _validated_save(data: dict) -> tuple[LayoutConfig, dict]:
    config = _hydrate(data)
    result = analyze(config)
    if not result.valid:
        raise HTTPException(status_code=422, detail={"message": "layout is not valid", "issues": list(result.issues)})
    return config, save_payload(config)


def _replace_seats(session: Session, screen_id: int, config: LayoutConfig) -> int:
    session.exec(delete(Seat).where(Seat.screen_id == screen_id))
    records = seat_rows(config)
    for s in records:
        session.add(
            Seat(
                screen_id=screen_id,
                seat_number=s.seat_number,
                row=s.row,
                column=s.column,
                seat_type=s.seat_type,
                price=s.price,
                is_accessible=s.is_accessible,
            )
        )
    return len(records)


def _screen_dict(screen: Screen) -> dict:
    return {
        "id": screen.id,
        "name": screen.name,
        "theater_id": screen.theater_id,
        "capacity": screen.capacity,
        "accessible_capacity": screen.accessible_capacity,
        "is_active": screen.is_active,
        "seat_layout": json.loads(screen.seat_layout_json or "{}"),
    }


@app.get("/health")
def health() -> dict:
    return {"ok": True}


@app.get("/seat-types")
def seat_types() -> dict:
    return registry_dict()


@app.post("/layouts/new")
def new_layout(payload: LayoutNew) -> dict:
    result = resize_grid(LayoutConfig(rows=payload.rows, columns=payload.columns), payload.rows, payload.columns, LIMITS)
    return _layout_response(result.config)


@app.post("/layouts/analyze")
def analyze_layout(payload: dict) -> dict:
    return _layout_response(_hydrate(payload))


@app.post("/layouts/edit")
def edit_layout(payload: EditRequest) -> dict:
    config = _hydrate(payload.layout)
    result = _apply_edit(config, payload.edit)
    return {
        "ok": result.ok,
        "failure": result.failure.value if result.failure else None,
        "warnings": [w.value for w in result.warnings],
        **_layout_response(result.config),
    }


@app.post("/screens")
def create_screen(payload: ScreenCreate, session: Session = Depends(_session)) -> dict:
    config, saved = _validated_save(payload.seat_layout)
    screen = Screen(
        name=payload.name,
        theater_id=payload.theater_id,
        capacity=saved["total_seats"],
        accessible_capacity=saved["accessible_seats_count"],
        seat_layout_json=json.dumps(saved["layout"]),
        is_active=payload.is_active,
    )
    session.add(screen)
    # One transaction: a screen is never stored without its seats.
    session.flush()
    created = _replace_seats(session, int(screen.id), config)
    session.commit()
    session.refresh(screen)
    logger.info("created screen {} with {} seats", screen.id, created)
    return {**_screen_dict(screen), "seats_created": created}


@app.get("/screens")
def list_screens(theater_id: Optional[int] = None, session: Session = Depends(_session)) -> list[dict]:
    stmt = select(Screen).order_by(Screen.created_at.desc())
    if theater_id is not None:
        stmt = stmt.where(Screen.theater_id == theater_id)
    return [
        {"id": s.id, "name": s.name, "theater_id": s.theater_id, "capacity": s.capacity, "is_active": s.is_active}
        for s in session.exec(stmt).all()
    ]


@app.get("/screens/{screen_id}")
def get_screen(screen_id: int, session: Session = Depends(_session)) -> dict:
    screen = session.get(Screen, screen_id)
    if not screen:
        raise HTTPException(status_code=404, detail="screen not found")
    seats = session.exec(select(Seat).where(Seat.screen_id == screen_id)).all()
    return {**_screen_dict(screen), "seats": [s.model_dump(mode="json") for s in seats]}


@app.put("/screens/{screen_id}")
def update_screen(screen_id: int, payload: ScreenUpdate, session: Session = Depends(_session)) -> dict:
    screen = session.get(Screen, screen_id)
    if not screen:
        raise HTTPException(status_code=404, detail="screen not found")
    if payload.name is not None:
        if not payload.name.strip():
            raise HTTPException(status_code=400, detail="name must not be blank")
        screen.name = payload.name.strip()
    if payload.is_active is not None:
        screen.is_active = payload.is_active

    regenerated = None
    if payload.seat_layout is not None:
        config, saved = _validated_save(payload.seat_layout)
        screen.capacity = saved["total_seats"]
        screen.accessible_capacity = saved["accessible_seats_count"]
        screen.seat_layout_json = json.dumps(saved["layout"])
        # Seats are recreated from the layout on every save.
        regenerated = _replace_seats(session, screen_id, config)
    screen.updated_at = datetime.now(timezone.utc)
    session.add(screen)
    session.commit()
    session.refresh(screen)
    if regenerated is not None:
        logger.info("screen {} layout replaced, {} seats", screen_id, regenerated)
    return {**_screen_dict(screen), "seats_created": regenerated}


@app.delete("/screens/{screen_id}")
def delete_screen(screen_id: int, session: Session = Depends(_session)) -> dict:
    screen = session.get(Screen, screen_id)
    if not screen:
        raise HTTPException(status_code=404, detail="screen not found")
    session.exec(delete(Seat).where(Seat.screen_id == screen_id))
    session.delete(screen)
    session.commit()
    return {"deleted": True}


@app.get("/screens/{screen_id}/seats.csv")
def export_seats_csv(screen_id: int, session: Session = Depends(_session)) -> Response:
    screen = session.get(Screen, screen_id)
    if not screen:
        raise HTTPException(status_code=404, detail="screen not found")
    seats = session.exec(select(Seat).where(Seat.screen_id == screen_id).order_by(Seat.id)).all()

    out = io.StringIO()
    w = csv.writer(out)
    w.writerow(["screen", "seat_number", "row", "column", "seat_type", "status", "price", "is_accessible"])
    for s in seats:
        w.writerow(
            [
                screen.name,
                s.seat_number,
                s.row,
                s.column,
                getattr(s.seat_type, "value", str(s.seat_type)),
                getattr(s.status, "value", str(s.status)),
                s.price,
                s.is_accessible,
            ]
        )

    return Response(
        content=out.getvalue(),
        media_type="text/csv",
        headers={"content-disposition": f'attachment; filename="screen_{screen_id}_seats.csv"'},
    )
