# apan/main.py

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from apan.config import API_PREFIX, FRONTEND_BASE_URL, LOG_LEVEL
from apan.mail.mail_service import build_mail_service

# ---------------- LOGGING ----------------
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("apan")

app = FastAPI(title="APAN Projects Backend")

# ---------------- CORS ----------------
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

if FRONTEND_BASE_URL not in origins:
    origins.append(FRONTEND_BASE_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------- DATABASE INIT ----------------
from apan.database import Base, engine  # noqa: E402
import apan.models  # noqa: E402,F401

logger.info("Checking database models...")
Base.metadata.create_all(bind=engine)
logger.info("Database ready.")

# ---------------- MAIL ----------------
app.state.mail_service = build_mail_service()


# ---------------- ERRORS ----------------
@app.exception_handler(SQLAlchemyError)
def handle_database_error(request: Request, exc: SQLAlchemyError):
    logger.exception(
        "unhandled_database_error",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ---------------- ROUTERS ----------------
from apan.auth.auth_router import router as auth_router  # noqa: E402
from apan.project.action_router import router as action_router  # noqa: E402
from apan.project.goal_router import router as goal_router  # noqa: E402
from apan.project.project_router import router as project_router  # noqa: E402
from apan.user.user_router import router as user_router  # noqa: E402

# project routes first: /users/projects must not be captured by /users/{user_id}
app.include_router(project_router, prefix=API_PREFIX)
app.include_router(goal_router, prefix=API_PREFIX)
app.include_router(action_router, prefix=API_PREFIX)
app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(user_router, prefix=API_PREFIX)


# ---------------- ROOT ----------------
@app.get("/")
def read_root():
    return {"message": "APAN backend running"}
