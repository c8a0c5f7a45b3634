"""WSGI entry point for the wealth planner API."""

import os
import sys

from wealth_planner import create_app

app = create_app()

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))

    # Allow `python wsgi.py --port 8080`
    if len(sys.argv) > 2 and sys.argv[1] == "--port":
        port = int(sys.argv[2])

    app.run(debug=app.config["DEBUG"], host="0.0.0.0", port=port)
