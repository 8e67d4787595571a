from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from typing import Optional, Any
from pydantic import BaseModel


def serialize(data: Any) -> Any:
    # Pydantic schemas are dumped by alias so the wire format is camelCase
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, list):
        return [serialize(item) for item in data]
    if isinstance(data, dict):
        return {key: serialize(value) for key, value in data.items()}
    return jsonable_encoder(data)


def build_response(
    status_code: int,
    success: bool,
    message: Optional[str] = None,
    data: Any = None,
    errors: Any = None,
    meta: Optional[dict] = None,
) -> JSONResponse:
    response = {"success": success}

    if message is not None:
        response["message"] = message

    if data is not None:
        response["data"] = serialize(data)

    if errors is not None:
        response["errors"] = serialize(errors)

    if meta is not None:
        response["meta"] = meta

    return JSONResponse(
        content=response,
        status_code=status_code,
        media_type="application/json",
    )
