import logging

from fastapi import FastAPI
from planner.config import config
from planner.routes import schedule, sessions

logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create FastAPI app
app = FastAPI(
    title="Deadline Planner API",
    description="Plans deadline-driven tasks around obligations and exports the result as an iCalendar file",
    version="1.0.0"
)

# Include routers
app.include_router(schedule.router, prefix="/schedule", tags=["schedule"])
app.include_router(sessions.router, prefix="/sessions", tags=["sessions"])

@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": "Welcome to Deadline Planner API",
        "version": "1.0.0",
        "features": [
            "Free-time computation around weekly, dated and daily obligations",
            "Daily pacing by intensity mode and deadline risk",
            "Greedy block allocation with sub-phase rotation",
            "iCalendar export after explicit approval"
        ],
        "endpoints": {
            "schedule": "POST /schedule/ - Plan tasks and return events",
            "schedule_ics": "POST /schedule/ics - Plan tasks and return an .ics file",
            "generate": "POST /sessions/{id}/generate - Plan tasks into a session",
            "approve": "POST /sessions/{id}/approve?version=N - Approve the reviewed schedule",
            "download": "GET /sessions/{id}/schedule.ics - Download the approved schedule"
        },
        "swagger_ui": "/docs - Interactive API documentation",
        "redoc": "/redoc - Alternative API documentation"
    }

@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}

# This allows running the app directly with: python -m planner.main
if __name__ == "__main__":
    import uvicorn
    print("🚀 Starting Deadline Planner API...")
    print(f"📖 API Documentation: http://localhost:{config.port}/docs")
    print(f"🔍 Health Check: http://localhost:{config.port}/health")
    # Use import string format for reload to work
    uvicorn.run("planner.main:app", host=config.host, port=config.port, reload=True)
