"""Development entry point: ``python app.py`` serves the API on $HOST:$PORT."""

from school_attendance.main import run

if __name__ == "__main__":
    run()
