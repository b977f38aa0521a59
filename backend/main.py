from dotenv import load_dotenv

# Load environment variables before the config class reads them
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import router as v1_router
from app.config import config
from app.schemas import HealthResponse

app = FastAPI(
    title="T-Shirt Mockup Recolor Backend",
    description="Recolors t-shirt mockups and composites designs for preview",
    version=config.VERSION
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.get("/healthz", response_model=HealthResponse)
async def healthz():
    """Health check endpoint."""
    return HealthResponse(ok=True, version=config.VERSION, service=config.SERVICE_NAME)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
