from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from seat_layout.editor import LabelPolicy
from seat_layout.layout import NumberingScheme, RowNaming


class LayoutNew(BaseModel):
    rows: int = 8
    columns: int = 12


class PaintEdit(BaseModel):
    type: Literal["paint"]
    row: int
    col: int
    # Unknown keys are substituted with "normal" by the engine, not rejected here.
    seat_type: str


class CustomLabelEdit(BaseModel):
    type: Literal["custom_label"]
    row: int
    col: int
    label: str = ""
    policy: LabelPolicy = LabelPolicy.design


class ToggleRowEdit(BaseModel):
    type: Literal["toggle_row"]
    row: int


class ToggleRowsEdit(BaseModel):
    type: Literal["toggle_rows"]
    rows: list[int] = Field(min_length=1)


class ResizeEdit(BaseModel):
    type: Literal["resize"]
    rows: int
    columns: int


class NamingEdit(BaseModel):
    type: Literal["naming"]
    numbering_scheme: Optional[NumberingScheme] = None
    row_naming: Optional[RowNaming] = None
    custom_row_names: Optional[list[str]] = None


LayoutEdit = Annotated[
    Union[PaintEdit, CustomLabelEdit, ToggleRowEdit, ToggleRowsEdit, ResizeEdit, NamingEdit],
    Field(discriminator="type"),
]


class EditRequest(BaseModel):
    layout: dict
    edit: LayoutEdit


class ScreenCreate(BaseModel):
    name: str
    theater_id: int
    seat_layout: dict
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class ScreenUpdate(BaseModel):
    name: Optional[str] = None
    seat_layout: Optional[dict] = None
    is_active: Optional[bool] = None
