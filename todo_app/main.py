import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import CORS_ORIGINS, TODO_STORAGE_KEY, get_openai_api_key
from .controller import TodoController
from .database import engine
from .errors import PersistenceError, TodoAppError
from .routers import ai, todos
from .storage import KeyValueStorage, TodoStorage
from .store import TodoStore

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Todo API",
    description="Single-user todo list with AI subtask suggestions and prioritisation",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(todos.router, prefix="/api", tags=["todos"])
app.include_router(ai.router, prefix="/api/ai", tags=["ai"])


@app.exception_handler(TodoAppError)
async def todo_app_error_handler(request: Request, exc: TodoAppError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "invalid request"
    return JSONResponse(status_code=400, content={"error": message})


# Build the store once on startup; routes get the controller through a dependency
@app.on_event("startup")
def on_startup():
    try:
        storage = TodoStorage(KeyValueStorage(engine), key=TODO_STORAGE_KEY)
        store = TodoStore(storage)
    except PersistenceError as e:
        # Refuse to start rather than overwrite todos that could not be read
        logger.error("Cannot read todo storage at startup: %s", e.message)
        raise
    app.state.controller = TodoController(store)
    if not get_openai_api_key():
        logger.warning("OPENAI_API_KEY is not set; AI routes will answer 503")


@app.get("/")
def read_root():
    return {"message": "Todo API"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}
