from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, Union

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from ..adapters import canvas as canvas_adapter


class CanvasCreate(BaseModel):
    name: str = Field(default="Untitled", description="Canvas name")
    unit: str = Field(default="cm", description="Display unit (cm or in)")


class CanvasResponse(BaseModel):
    id: str
    name: str
    unit: str
    created_at: str
    updated_at: str
    shapes: List[Dict[str, Any]]


class ShapeCreate(BaseModel):
    kind: str = Field(..., description="circle, rectangle, triangle or line")
    start: Tuple[float, float] = Field(..., description="Drag start point in pixels")
    end: Tuple[float, float] = Field(..., description="Drag end point in pixels")


class MoveRequest(BaseModel):
    dx: float = Field(default=0.0, description="Horizontal offset in pixels")
    dy: float = Field(default=0.0, description="Vertical offset in pixels")


class ResizeRequest(BaseModel):
    factor: float = Field(..., description="Scale factor; the sign is ignored")


class RotateRequest(BaseModel):
    angle: float = Field(..., description="Absolute rotation in degrees")


class SelectRequest(BaseModel):
    shape_id: Optional[str] = Field(default=None, description="Shape to select; null clears the selection")


class MeasurementUpdate(BaseModel):
    value: Union[float, str] = Field(..., description="New measurement value as entered by the user")
    unit: Optional[str] = Field(default=None, description="Unit of the value; defaults to the canvas unit")


class MeasurementResponse(BaseModel):
    shape: Dict[str, Any]
    unit: str
    measurements: Dict[str, str]
    values: Dict[str, float]
    editable: List[str]
    changed: Optional[bool] = None


router = APIRouter(prefix="/canvases", tags=["canvases"])


def _not_found(exc: KeyError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Not found: {exc.args[0]}")


def _bad_request(exc: ValueError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.get("/", response_model=List[CanvasResponse])
async def list_canvases() -> List[CanvasResponse]:
    return [CanvasResponse(**item) for item in canvas_adapter.list_canvases()]


@router.post("/", response_model=CanvasResponse, status_code=status.HTTP_201_CREATED)
async def create_canvas(body: CanvasCreate) -> CanvasResponse:
    try:
        item = canvas_adapter.create_canvas(body.model_dump())
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return CanvasResponse(**item)


@router.get("/{canvas_id}", response_model=CanvasResponse)
async def get_canvas(canvas_id: str) -> CanvasResponse:
    try:
        data = canvas_adapter.get_canvas(canvas_id)
    except KeyError as exc:
        raise _not_found(exc) from exc
    return CanvasResponse(**data)


@router.delete("/{canvas_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_canvas(canvas_id: str) -> None:
    try:
        canvas_adapter.delete_canvas(canvas_id)
    except KeyError as exc:
        raise _not_found(exc) from exc


@router.post("/{canvas_id}/shapes", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
async def add_shape(canvas_id: str, body: ShapeCreate) -> Dict[str, Any]:
    try:
        return canvas_adapter.add_shape(canvas_id, body.model_dump())
    except KeyError as exc:
        raise _not_found(exc) from exc
    except ValueError as exc:
        raise _bad_request(exc) from exc


@router.delete("/{canvas_id}/shapes", response_model=CanvasResponse)
async def clear_shapes(canvas_id: str) -> CanvasResponse:
    try:
        return CanvasResponse(**canvas_adapter.clear_shapes(canvas_id))
    except KeyError as exc:
        raise _not_found(exc) from exc


@router.delete("/{canvas_id}/shapes/{shape_id}", response_model=CanvasResponse)
async def delete_shape(canvas_id: str, shape_id: str) -> CanvasResponse:
    try:
        return CanvasResponse(**canvas_adapter.delete_shape(canvas_id, shape_id))
    except KeyError as exc:
        raise _not_found(exc) from exc


@router.post("/{canvas_id}/shapes/{shape_id}/move", response_model=CanvasResponse)
async def move_shape(canvas_id: str, shape_id: str, body: MoveRequest) -> CanvasResponse:
    try:
        return CanvasResponse(**canvas_adapter.move_shape(canvas_id, shape_id, body.dx, body.dy))
    except KeyError as exc:
        raise _not_found(exc) from exc


@router.post("/{canvas_id}/shapes/{shape_id}/resize", response_model=CanvasResponse)
async def resize_shape(canvas_id: str, shape_id: str, body: ResizeRequest) -> CanvasResponse:
    try:
        return CanvasResponse(**canvas_adapter.resize_shape(canvas_id, shape_id, body.factor))
    except KeyError as exc:
        raise _not_found(exc) from exc


@router.post("/{canvas_id}/shapes/{shape_id}/rotate", response_model=CanvasResponse)
async def rotate_shape(canvas_id: str, shape_id: str, body: RotateRequest) -> CanvasResponse:
    try:
        return CanvasResponse(**canvas_adapter.rotate_shape(canvas_id, shape_id, body.angle))
    except KeyError as exc:
        raise _not_found(exc) from exc


@router.post("/{canvas_id}/select", response_model=CanvasResponse)
async def select_shape(canvas_id: str, body: SelectRequest) -> CanvasResponse:
    try:
        return CanvasResponse(**canvas_adapter.select_shape(canvas_id, body.shape_id))
    except KeyError as exc:
        raise _not_found(exc) from exc


@router.get("/{canvas_id}/shapes/{shape_id}/measurements", response_model=MeasurementResponse)
async def get_measurements(canvas_id: str, shape_id: str, unit: Optional[str] = None) -> MeasurementResponse:
    try:
        return MeasurementResponse(**canvas_adapter.get_measurements(canvas_id, shape_id, unit))
    except KeyError as exc:
        raise _not_found(exc) from exc
    except ValueError as exc:
        raise _bad_request(exc) from exc


@router.put("/{canvas_id}/shapes/{shape_id}/measurements/{key}", response_model=MeasurementResponse)
async def update_measurement(
    canvas_id: str, shape_id: str, key: str, body: MeasurementUpdate
) -> MeasurementResponse:
    try:
        data = canvas_adapter.update_measurement(canvas_id, shape_id, key, body.value, body.unit)
    except KeyError as exc:
        raise _not_found(exc) from exc
    except ValueError as exc:
        raise _bad_request(exc) from exc
    return MeasurementResponse(**data)


@router.get("/{canvas_id}/hit")
async def hit_test(canvas_id: str, x: float, y: float) -> Dict[str, Any]:
    try:
        shape = canvas_adapter.hit_test(canvas_id, x, y)
    except KeyError as exc:
        raise _not_found(exc) from exc
    return {"hit": shape is not None, "shape": shape}
