from fastapi import FastAPI

from .api import router
from .database import init_db

app = FastAPI(title="SkyBook")
app.include_router(router)


@app.on_event("startup")
async def startup():
    await init_db()


@app.get("/health")
async def health():
    return {"ok": True}
