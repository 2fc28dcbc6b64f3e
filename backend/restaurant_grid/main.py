from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from restaurant_grid.models.restaurant_model import ErrorResponse
from restaurant_grid.routes.restaurant_route import router as restaurant_router

app = FastAPI(title="Restaurant Grid Search")
app.include_router(restaurant_router)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", []) if part != "body")
        messages.append(f"{field}: {error.get('msg')}" if field else error.get("msg", ""))
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(message="; ".join(messages) or "Invalid request").model_dump(),
    )

# --- Root Endpoint ---
@app.get("/")
async def root():
    return {
        "message": "Welcome to Restaurant Grid Search API",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "search_area": "/restaurants/search-area",
            "docs": "/docs"
        },
        "version": "1.0.0"
    }

# --- Health Check ---
@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "Restaurant Grid Search"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("restaurant_grid.main:app", host="0.0.0.0", port=8000, reload=True)
