#!/usr/bin/env python3
"""Start the tagup web application."""

import uvicorn
from rich.console import Console

console = Console()

if __name__ == "__main__":
    console.print("🚀 Starting tagup Web Application...", style="bold")
    console.print("📍 URL: http://localhost:8000")
    console.print("📄 API docs: http://localhost:8000/docs")
    console.print("🛑 Press Ctrl+C to stop", style="dim")
    console.print()

    uvicorn.run(
        "apps.web.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
        reload_dirs=["apps", "tagup"]
    )
