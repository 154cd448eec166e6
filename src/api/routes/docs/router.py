"""Schema OpenAPI em YAML.

FastAPI já expõe /openapi.json e o Swagger UI em /docs; aqui o mesmo
schema é servido em YAML para clientes que consomem esse formato.
"""

from __future__ import annotations

import yaml
from fastapi import APIRouter, Request, Response

router = APIRouter()

YAML_MEDIA_TYPE = "application/yaml; charset=utf-8"


@router.get("/openapi.yaml", include_in_schema=False)
async def openapi_yaml(request: Request) -> Response:
    schema = request.app.openapi()
    content = yaml.safe_dump(schema, sort_keys=False, allow_unicode=True)
    return Response(content=content, media_type=YAML_MEDIA_TYPE)
