import uvicorn

from riddle_gate.core.app_factory import create_app

app = create_app()


def run() -> None:
    """Serve the app with uvicorn."""
    uvicorn.run("riddle_gate.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
