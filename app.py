"""Dev entry point: `flask --app app run` or `python app.py`."""
import os

from src.event_checkin.event_checkin.main import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
