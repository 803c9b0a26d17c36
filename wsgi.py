"""WSGI entry point for the salary calculator application."""

import os
import sys

from paycalc import create_app

app = create_app()

if __name__ == "__main__":
    port = 5000

    # Check for PORT environment variable (used by Render, Heroku, etc.)
    if "PORT" in os.environ:
        port = int(os.environ["PORT"])

    if len(sys.argv) > 2 and sys.argv[1] == "--port":
        port = int(sys.argv[2])

    app.run(debug=app.config["DEBUG"], host="0.0.0.0", port=port)
