# main.py

from pathlib import Path
from subprocess import run

from app.configs import settings


def start(cmmd: list[str]) -> None:
    run(cmmd, check=True)


def main() -> None:
    file_path = Path(__file__).resolve()
    bin_path = file_path.parent / ".venv" / "bin"
    uvicorn_path = bin_path / "uvicorn"
    cmmd = [
        f"{uvicorn_path}",
        "app.main:app",
        "--host",
        settings.HOST,
        "--port",
        str(settings.PORT),
        "--reload",
        "--log-level",
        settings.LOG_LEVEL,
        "--loop",
        "uvloop",
        "--http",
        "httptools",
    ]
    start(cmmd)


if __name__ == "__main__":
    main()
