# Chef AI local API entry point
import logging
import sys
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .settings import settings
from .routers.ready import router as ready_router
from .routers.prefs import router as prefs_router
from .routers.shopping import router as shopping_router
from .routers.plan import router as plan_router
from .routers.diary import router as diary_router
from .routers.chat import router as chat_router
from .routers.recipes import router as recipes_router

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger("chefai")

app = FastAPI(title="Chef AI API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ready_router, prefix="/api", tags=["ready"])
app.include_router(prefs_router, prefix="/api", tags=["prefs"])
app.include_router(shopping_router, prefix="/api/shopping", tags=["shopping"])
app.include_router(plan_router, prefix="/api", tags=["plan"])
app.include_router(diary_router, prefix="/api", tags=["diary"])
app.include_router(chat_router, prefix="/api", tags=["chat"])
app.include_router(recipes_router, prefix="/api", tags=["recipes"])
