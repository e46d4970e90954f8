# backend/wsgi.py
import os

from coffee_pos import create_app

app = create_app()


if __name__ == "__main__":
    port = int(os.environ.get("PORT") or os.environ.get("RAILWAY_PORT") or 3000)
    app.run(host="0.0.0.0", port=port)
