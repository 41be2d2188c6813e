"""loginguard - simple local launcher."""
import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "loginguard.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        reload_includes=["*.py"],
        reload_excludes=["__pycache__/*", "logs/*"],
    )
