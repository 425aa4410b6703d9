# Run with: python -m task_reminder  OR  uvicorn task_reminder.app:app --reload
import uvicorn

from task_reminder.config import load_settings


def main() -> None:
    settings = load_settings()
    uvicorn.run(
        "task_reminder.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
