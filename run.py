import logging
from recall_app import create_app

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

app = create_app()

if __name__ == "__main__":
    # bind to all interfaces so a browser outside WSL/containers can reach it
    app.run(host="0.0.0.0", port=5000, debug=True)
