#!/usr/bin/env python3
"""
Simple launcher script for Deadline Planner API.
Run this from the root directory to start the application.
"""

import uvicorn

from planner.config import config

if __name__ == "__main__":
    print("🚀 Starting Deadline Planner API with auto-reload...")
    print(f"📖 API Documentation: http://localhost:{config.port}/docs")
    print(f"🔍 Health Check: http://localhost:{config.port}/health")
    print("🔄 Auto-reload is ENABLED - changes will automatically restart the server")
    print("🛑 Press Ctrl+C to stop the server")
    print("-" * 50)

    # Use import string format for reload to work properly
    uvicorn.run(
        "planner.main:app",  # This is the import string format
        host=config.host,
        port=config.port,
        reload=True,
        reload_dirs=["planner"],  # Watch the planner directory for changes
        log_level=config.log_level.lower()
    )
