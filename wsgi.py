"""WSGI entry point for the net worth planner application."""

import os
import sys

from planner import create_app

app = create_app()

if __name__ == "__main__":
    # Get port from environment variable or command line argument
    port = 3001  # default

    # Check for PORT environment variable (used by Render, Heroku, etc.)
    if "PORT" in os.environ:
        port = int(os.environ["PORT"])

    # Check for --port command line argument
    if len(sys.argv) > 1 and sys.argv[1] == "--port" and len(sys.argv) > 2:
        port = int(sys.argv[2])

    if "--create-tables" in sys.argv:
        from planner.database.base import create_tables

        create_tables()
        app.logger.info("Database tables created")

    # Run the application
    debug = os.environ.get("FLASK_ENV", "development") == "development"
    app.run(debug=debug, host=os.environ.get("HOST", "0.0.0.0"), port=port)
