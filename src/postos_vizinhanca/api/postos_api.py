# ==========================================================
# 📦 src/postos_vizinhanca/api/postos_api.py
# ==========================================================

import json

import numpy as np
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from postos_vizinhanca.config.settings import get_settings
from postos_vizinhanca.logs.logging_config import setup_logging
from .routes import router as postos_router

load_dotenv()
_settings = get_settings()
setup_logging(_settings.log_level, _settings.log_dir, nome="postos_api")

app = FastAPI(
    title="Postos Vizinhança API",
    description="Proximidade entre postos: vizinho mais próximo, raio e métricas",
    version="1.0.0",
    openapi_url="/openapi.json",
    docs_url="/docs",
)

# ==========================================================
# 🌍 CORS
# ==========================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==========================================================
# 🧹 Middleware global de saneamento JSON
# ==========================================================
@app.middleware("http")
async def sanitize_json_response(request: Request, call_next):
    response = await call_next(request)

    if "application/json" in response.headers.get("content-type", ""):
        raw_body = b"".join([chunk async for chunk in response.body_iterator])
        try:
            content = json.loads(raw_body)
        except ValueError:
            return Response(content=raw_body, status_code=response.status_code, media_type="application/json")

        def clean(obj):
            if isinstance(obj, dict):
                return {k: clean(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [clean(i) for i in obj]
            elif isinstance(obj, float) and (np.isnan(obj) or np.isinf(obj)):
                return None
            return obj

        return JSONResponse(content=clean(content), status_code=response.status_code)

    return response


app.include_router(postos_router)


@app.get("/", tags=["Status"])
def root():
    return {"status": "Postos Vizinhança API online 🚀"}


def main():
    uvicorn.run("postos_vizinhanca.api.postos_api:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
