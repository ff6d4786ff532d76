from datetime import datetime

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def ok_response(status: int, path: str, **payload) -> JSONResponse:
    body = {
        "success": True,
        "status": status,
        **payload,
        "timeStamp": datetime.utcnow().isoformat(),
        "path": path,
    }
    return JSONResponse(status_code=status, content=jsonable_encoder(body))
